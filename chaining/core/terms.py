"""
Terms, substitutions and Robinson unification with occurs check.

Everything else in the package builds on this module. Given two terms,
find a substitution that makes them identical -- or report that no such
substitution exists.

Terms:
    str starting with "$"   -> variable:  "$prf", "$p"
    any other str           -> symbol:    "ab", "A", "ModusPonens", "->"
    non-empty tuple         -> compound:  ("MP", "ab"), (":", "a", "A")

Symbols may start with an uppercase letter, so variables carry a sigil.

A typed judgment is the compound (":", proof, theorem). An arrow type is
("->", premise, conclusion). A curried application is the 2-tuple
(abstraction, argument).

Substitutions are plain dicts: {"$x": ("s", "0"), "$y": "alice"}
"""

import itertools


COLON = ":"
ARROW = "->"
LAMBDA = "λ"

_fresh = itertools.count()


def is_variable(term) -> bool:
    """Variables start with "$". A lone "$" is a symbol."""
    return isinstance(term, str) and len(term) > 1 and term[0] == "$"


def is_symbol(term) -> bool:
    return isinstance(term, str) and not is_variable(term)


def is_compound(term) -> bool:
    """Compounds are non-empty tuples: (head, child1, child2, ...)."""
    return isinstance(term, tuple) and len(term) > 0


def is_application(term) -> bool:
    """A curried application: exactly (abstraction, argument)."""
    return isinstance(term, tuple) and len(term) == 2


def judgment(proof, theorem) -> tuple:
    return (COLON, proof, theorem)


def is_judgment(term) -> bool:
    return isinstance(term, tuple) and len(term) == 3 and term[0] == COLON


def arrow(*types):
    """
    Curried arrow type: arrow(A, B, C) == ("->", A, ("->", B, C)).

    A single argument is returned as is.
    """
    if not types:
        raise ValueError("arrow() needs at least one type")
    result = types[-1]
    for premise in reversed(types[:-1]):
        result = (ARROW, premise, result)
    return result


def apply_curried(head, *args):
    """apply_curried(f, a, b) == ((f, a), b)."""
    result = head
    for arg in args:
        result = (result, arg)
    return result


def occurs_in(var, term) -> bool:
    """Does variable var occur anywhere in term? Prevents infinite substitutions."""
    if var == term:
        return True
    if isinstance(term, tuple):
        return any(occurs_in(var, child) for child in term)
    return False


def variables_of(term) -> list:
    """Variables of term in order of first appearance, no repeats."""
    seen = []

    def walk(t):
        if is_variable(t):
            if t not in seen:
                seen.append(t)
        elif isinstance(t, tuple):
            for child in t:
                walk(child)

    walk(term)
    return seen


def is_ground(term) -> bool:
    if is_variable(term):
        return False
    if isinstance(term, tuple):
        return all(is_ground(child) for child in term)
    return True


def apply_substitution(sub: dict, term):
    """Apply a substitution dict to a term. Follows chains."""
    if is_variable(term):
        if term in sub:
            return apply_substitution(sub, sub[term])
        return term
    if isinstance(term, tuple):
        return tuple(apply_substitution(sub, child) for child in term)
    return term  # symbol


def walk(sub: dict, term):
    """Follow a variable's binding chain to its end. Compounds are not entered."""
    while is_variable(term) and term in sub:
        term = sub[term]
    return term


def unify(t1, t2, sub=None):
    """
    Unify two terms under substitution sub.

    Returns the updated substitution dict, or None if unification fails.
    The input dict is never mutated, so a caller can keep trying
    alternatives from the same starting point.
    """
    if sub is None:
        sub = {}

    t1 = walk(sub, t1)
    t2 = walk(sub, t2)

    if t1 == t2:
        return sub

    if is_variable(t1):
        if occurs_in(t1, apply_substitution(sub, t2)):
            return None  # occurs check: $x unify ($f $x) is unsound
        sub = dict(sub)
        sub[t1] = t2
        return sub

    if is_variable(t2):
        if occurs_in(t2, apply_substitution(sub, t1)):
            return None
        sub = dict(sub)
        sub[t2] = t1
        return sub

    if isinstance(t1, tuple) and isinstance(t2, tuple):
        if len(t1) != len(t2):
            return None  # different arity
        for c1, c2 in zip(t1, t2):
            sub = unify(c1, c2, sub)
            if sub is None:
                return None
        return sub

    return None  # two different symbols, or symbol vs compound


def match_instance(pattern, term, sub=None):
    """
    One-way matching: bind variables of pattern only.

    Succeeds iff term is an instance of pattern. Variables in term are
    treated as opaque constants.
    """
    if sub is None:
        sub = {}
    if is_variable(pattern):
        if pattern in sub:
            return sub if sub[pattern] == term else None
        sub = dict(sub)
        sub[pattern] = term
        return sub
    if isinstance(pattern, tuple) and isinstance(term, tuple):
        if len(pattern) != len(term):
            return None
        for p, t in zip(pattern, term):
            sub = match_instance(p, t, sub)
            if sub is None:
                return None
        return sub
    return sub if pattern == term else None


def fresh_suffix() -> str:
    return f"_{next(_fresh)}"


def fresh_variable(stem: str = "v") -> str:
    return f"${stem}{fresh_suffix()}"


def fresh_symbol(stem: str = "x") -> str:
    return f"{stem}{next(_fresh)}"


def rename_apart(term, suffix: str = None):
    """
    Rename every variable in term by appending suffix.

    Prevents variable capture when a stored judgment is matched against
    a query that happens to use the same variable names.
    """
    if suffix is None:
        suffix = fresh_suffix()
    var_map = {}

    def rename(t):
        if is_variable(t):
            if t not in var_map:
                var_map[t] = t + suffix
            return var_map[t]
        if isinstance(t, tuple):
            return tuple(rename(child) for child in t)
        return t

    return rename(term)


def canonical(term):
    """
    Rename variables to $_0, $_1, ... in order of first appearance.

    Two terms that differ only by variable names have the same canonical
    form, so results of separate searches can be compared.
    """
    mapping = {v: f"$_{i}" for i, v in enumerate(variables_of(term))}
    return apply_substitution(mapping, term)


def is_variant(t1, t2) -> bool:
    """Equal up to consistent variable renaming."""
    return canonical(t1) == canonical(t2)


def format_term(term) -> str:
    """S-expression text: (: ((MP ab) a) B)."""
    if isinstance(term, tuple):
        return "(" + " ".join(format_term(child) for child in term) + ")"
    return str(term)
