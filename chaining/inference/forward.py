"""
Forward chaining: from an assumed-true source, derive what follows.

The source is itself the first result. Then, while depth remains, the
source is combined with the store in each of three roles:

    argument:     source = prf : P.  Find abs : (-> P c) by backward
                  chaining, giving (abs prf) : c.
    abstraction:  source = prf : (-> P C).  Find arg : P by backward
                  chaining, giving (prf arg) : C.
    first premise of a stored rule Ctor : (-> P1 (-> P2 C)) with
                  source = prf : P1.  Find arg : P2 by backward
                  chaining, giving ((Ctor prf) arg) : C in one step.

Each new judgment is chained forward again one level down. Results are
not deduplicated: two derivations of the same theorem are two results,
because the proof terms differ.
"""

from typing import Callable, Iterator, Optional

from ..core.store import KnowledgeStore, as_environment
from ..core.terms import ARROW, judgment, unify, apply_substitution, fresh_variable
from .backward import SearchOptions, solve, check_depth, check_query


def _forward(store, depth, source, env, options) -> Iterator:
    yield source
    if depth <= 0:
        return
    options.emit("expand", depth, source)
    _, prf, thm = source

    # source as argument
    abs_var, ccln = fresh_variable("abs"), fresh_variable("ccln")
    goal = judgment(abs_var, (ARROW, thm, ccln))
    for s in solve(store, depth - 1, goal, {}, env, options):
        derived = apply_substitution(s, judgment((abs_var, prf), ccln))
        yield from _forward(store, depth - 1, derived, env, options)

    # source as abstraction
    prms, ccln = fresh_variable("prms"), fresh_variable("ccln")
    s0 = unify(thm, (ARROW, prms, ccln))
    if s0 is not None:
        arg_var = fresh_variable("arg")
        for s in solve(store, depth - 1, judgment(arg_var, prms), s0, env, options):
            derived = apply_substitution(s, judgment((prf, arg_var), ccln))
            yield from _forward(store, depth - 1, derived, env, options)

    # source as first premise of a two-premise rule
    ctor, second, ccln = (
        fresh_variable("ctor"), fresh_variable("prms"), fresh_variable("ccln"),
    )
    rule = judgment(ctor, (ARROW, thm, (ARROW, second, ccln)))
    for s0 in store.match(rule):
        arg_var = fresh_variable("arg")
        for s in solve(store, depth - 1, judgment(arg_var, second), s0, env, options):
            derived = apply_substitution(s, judgment(((ctor, prf), arg_var), ccln))
            yield from _forward(store, depth - 1, derived, env, options)


def forward(
    store: KnowledgeStore,
    depth: int,
    source,
    env=(),
    trace: Optional[Callable] = None,
) -> Iterator:
    """
    Every judgment reachable from source in at most depth forward steps.

    Args:
        store:   the knowledge store supplying rules and side premises
        depth:   forward step budget; also the budget of each backward
                 call that discharges the missing premise (minus one)
        source:  (":", proof, theorem) assumed true; its free variables
                 may be bound by a step
        env:     local typing facts for the backward calls
        trace:   optional trace(event, depth, term) callback
    """
    check_depth(depth)
    check_query(source)
    options = SearchOptions(trace=trace)
    return _forward(store, depth, source, as_environment(env), options)
