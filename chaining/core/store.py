"""
Core data structures: KnowledgeStore and Environment.

A KnowledgeStore is the mutable fact store every chaining call reads
from. It holds typed judgments (":", proof, theorem). Facts and rules
are stored the same way: no distinction between axioms and rules.

An Environment is the small, immutable, ordered list of local
variable-typing facts a single search carries with it (e.g. x1 : A
after introducing an abstraction).

Nothing in here depends on the chaining procedures.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional
import json

from .terms import (
    is_judgment, rename_apart, unify, apply_substitution, format_term,
)


@dataclass
class KnowledgeStore:
    """
    Ordered multiset of typed judgments, queried by unification.

    Insertion order is kept so enumeration is deterministic. There is
    no retraction: the store only grows.

    `item in store` is structural equality against the stored list;
    contains(item) is unification, so it also holds for renamed
    variants and for patterns with free variables.
    """
    judgments: list = field(default_factory=list)
    name: str = "kb"

    def __post_init__(self):
        items = list(self.judgments)
        self.judgments = []
        for j in items:
            self.add(j)

    def __len__(self):
        return len(self.judgments)

    def __iter__(self):
        return iter(tuple(self.judgments))

    def __contains__(self, item):
        return item in self.judgments

    def __repr__(self):
        return f"KnowledgeStore({self.name!r}, {len(self.judgments)} judgments)"

    def add(self, item) -> None:
        """Unconditional insert. Duplicates are allowed (multiset)."""
        if not is_judgment(item):
            raise ValueError(f"not a typed judgment: {format_term(item)}")
        self.judgments.append(item)

    def add_all(self, items) -> None:
        for item in items:
            self.add(item)

    def contains(self, item) -> bool:
        """Does any stored judgment unify with item?"""
        for _ in self.match(item):
            return True
        return False

    def add_if_absent(self, item) -> bool:
        """
        Insert unless a stored judgment already unifies with item.

        Returns True if the store grew.
        """
        if self.contains(item):
            return False
        self.add(item)
        return True

    def get_all(self) -> list:
        return list(self.judgments)

    def match(self, pattern, sub: Optional[dict] = None) -> Iterator[dict]:
        """
        Yield one substitution per stored judgment unifying with pattern.

        Each stored judgment is renamed apart before unifying. The store
        is read through a snapshot taken when iteration starts.
        """
        for stored in tuple(self.judgments):
            result = unify(pattern, rename_apart(stored), sub)
            if result is not None:
                yield result

    def query(self, pattern) -> Iterator:
        """Yield pattern instantiated by every match."""
        for sub in self.match(pattern):
            yield apply_substitution(sub, pattern)

    def copy(self, name: Optional[str] = None) -> "KnowledgeStore":
        return KnowledgeStore(list(self.judgments), name or self.name)

    def to_dict(self):
        return {
            "name": self.name,
            "judgments": [serialize_term(j) for j in self.judgments],
        }

    @classmethod
    def from_dict(cls, d):
        return cls(
            [deserialize_term(j) for j in d["judgments"]],
            d.get("name", "kb"),
        )

    def save(self, path="kb.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path="kb.json"):
        with open(path) as f:
            return cls.from_dict(json.load(f))


@dataclass(frozen=True)
class Environment:
    """
    Ordered local typing facts for one search branch.

    Entries are tried once each, in insertion order, and are not renamed
    apart: their variables belong to the enclosing query.
    """
    entries: tuple = ()

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def extend(self, item) -> "Environment":
        if not is_judgment(item):
            raise ValueError(f"not a typed judgment: {format_term(item)}")
        return Environment(self.entries + (item,))

    def match(self, pattern, sub: Optional[dict] = None) -> Iterator[dict]:
        for entry in self.entries:
            result = unify(pattern, entry, sub)
            if result is not None:
                yield result

    def query(self, pattern) -> Iterator:
        for sub in self.match(pattern):
            yield apply_substitution(sub, pattern)


def as_environment(env) -> Environment:
    if isinstance(env, Environment):
        return env
    result = Environment()
    for item in env or ():
        result = result.extend(item)
    return result


def serialize_term(t):
    if isinstance(t, tuple):
        return {"_fn": [serialize_term(x) for x in t]}
    if isinstance(t, str):
        return t
    raise ValueError(f"cannot serialize term component: {t!r}")


def deserialize_term(t):
    if isinstance(t, dict):
        if "_fn" in t:
            return tuple(deserialize_term(x) for x in t["_fn"])
        raise ValueError(f"unknown term encoding: {t!r}")
    if isinstance(t, str):
        return t
    raise ValueError(f"unknown term encoding: {t!r}")
