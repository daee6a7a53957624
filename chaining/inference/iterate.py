"""
Iterative chaining: low depth, many rounds, results committed between rounds.

The chainers are stateless functions of their inputs. Calling them again
and again at high depth re-derives the same low-depth sub-proofs
combinatorially. Instead, each round runs the chainer once at a small
fixed depth, collapses its alternatives into a list, writes every new
result into the store, and then resumes from those results. Proofs found
in one round become directly matchable facts in the next, so a theorem
that needs depth 2n in one shot is reachable at depth n over a few rounds.

Only this module writes to a KnowledgeStore, and only between rounds.
"""

from typing import Callable, Iterator

from ..core.store import KnowledgeStore
from ..core.terms import judgment, format_term
from ..core.nondet import collapse, superpose
from .backward import backward, check_depth, check_query
from .forward import forward


OPEN_QUERY = judgment("$prf", "$thm")


def check_rounds(rounds):
    if not isinstance(rounds, int) or isinstance(rounds, bool) or rounds < 0:
        raise ValueError(f"rounds must be a non-negative int, got {rounds!r}")


def insert_if_absent(store: KnowledgeStore, item) -> bool:
    """Add item unless something in store already unifies with it."""
    return store.add_if_absent(item)


def commit(store: KnowledgeStore, results: list, verbose: bool = False) -> list:
    """Insert every result not yet present. Returns the ones inserted."""
    added = []
    for item in results:
        if insert_if_absent(store, item):
            added.append(item)
            if verbose:
                print(f"  [new] {format_term(item)}")
    return added


def _iterate(step: Callable, store, rounds, item, verbose, round_no=1) -> Iterator:
    if rounds == 0:
        yield item
        return
    results = collapse(step(item))
    if verbose:
        print(f"--- Round {round_no}: {format_term(item)} -> {len(results)} results ---")
    commit(store, results, verbose)
    for result in superpose(results):
        yield from _iterate(step, store, rounds - 1, result, verbose, round_no + 1)


def iterate_backward(
    store: KnowledgeStore,
    depth: int,
    rounds: int,
    query,
    verbose: bool = False,
    **kwargs,
) -> Iterator:
    """
    Backward chain for `rounds` rounds, committing each round's results.

    rounds == 0 yields query unchanged and leaves the store alone.
    Otherwise each result of the round becomes the query of the next.
    kwargs are passed through to backward().

    The iterator is lazy: the store is only written as it is consumed.
    """
    check_depth(depth)
    check_rounds(rounds)
    check_query(query)
    def step(q):
        return backward(store, depth, q, **kwargs)

    return _iterate(step, store, rounds, query, verbose)


def iterate_forward(
    store: KnowledgeStore,
    depth: int,
    rounds: int,
    source,
    verbose: bool = False,
    **kwargs,
) -> Iterator:
    """
    Forward chain for `rounds` rounds, committing each round's results.

    Each derived judgment is the source of the next round.
    kwargs are passed through to forward().
    """
    check_depth(depth)
    check_rounds(rounds)
    check_query(source)
    def step(s):
        return forward(store, depth, s, **kwargs)

    return _iterate(step, store, rounds, source, verbose)


def synthesize_lemmas(
    store: KnowledgeStore,
    depth: int,
    rounds: int,
    pattern=OPEN_QUERY,
    verbose: bool = False,
    **kwargs,
) -> list:
    """
    Run `rounds` rounds of backward chaining on pattern and keep the lemmas.

    With the default open pattern ($prf : $thm), a round commits every
    judgment provable at `depth` from the current store. Returns the
    judgments inserted, in order.
    """
    check_depth(depth)
    check_rounds(rounds)
    check_query(pattern)
    added = []
    for round_no in range(1, rounds + 1):
        results = collapse(backward(store, depth, pattern, **kwargs))
        if verbose:
            print(f"--- Lemma round {round_no}: {len(results)} results ---")
        new = commit(store, results, verbose)
        added.extend(new)
        if not new:
            break
    return added


def prove_with_lemmas(
    store: KnowledgeStore,
    depth: int,
    rounds: int,
    query,
    verbose: bool = False,
    **kwargs,
) -> Iterator:
    """
    Synthesize lemmas for `rounds` rounds, then prove query at `depth`.

    The lemma rounds run eagerly, before the returned iterator is read.
    """
    check_query(query)
    synthesize_lemmas(store, depth, rounds, verbose=verbose, **kwargs)
    return backward(store, depth, query, **kwargs)
