"""
Non-determinism as lazy sequences.

A chaining call yields alternatives one at a time. Two operations move
between the lazy and the concrete world:

    collapse(alternatives)  -> list        materialize every alternative
    superpose(collection)   -> iterator    re-expand into fresh alternatives

Calling two producers in sequence forms the cross product of their
alternatives (see bind); that is ordinary backtracking.
"""

from typing import Callable, Iterable, Iterator


def collapse(alternatives: Iterable) -> list:
    return list(alternatives)


def superpose(collection: Iterable) -> Iterator:
    """A fresh, restartable source over a finite collection."""
    return iter(tuple(collection))


def bind(alternatives: Iterable, fn: Callable) -> Iterator:
    """For every alternative x, yield every alternative of fn(x)."""
    for x in alternatives:
        yield from fn(x)


def first(alternatives: Iterable, default=None):
    """The first alternative, or default when there are none."""
    for x in alternatives:
        return x
    return default


def take(alternatives: Iterable, n: int) -> list:
    """At most n alternatives, without forcing the rest."""
    out = []
    if n <= 0:
        return out
    for x in alternatives:
        out.append(x)
        if len(out) >= n:
            break
    return out
