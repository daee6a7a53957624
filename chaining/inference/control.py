"""
Inference control: programmable pruning for backward chaining.

backward() prunes by a fixed depth budget. Here the budget becomes an
arbitrary context threaded alongside the query, with three plug points:

    abs_update(query, ctx) -> ctx'   before the abstraction subgoal
    arg_update(query, ctx) -> ctx'   before the argument subgoal
    terminate(query, ctx)  -> bool   before a node is expanded

The updaters take the query first and the context second. The query
only steers the control logic; nothing a control function returns ever
reaches unification, so control code cannot corrupt a proof term.

Every node still gets its base-case store matches; terminate decides
whether it may also be expanded. Pruning is local: siblings of a pruned
node are unaffected. With recheck_matches=True a base-case match is
also checked against terminate after matching, and dropped if it holds.

Known issue, left open on purpose: a terminate predicate written with
free variables, e.g. "stop when the target unifies with (R $x $x)",
also fires on targets that are merely unbound, pruning branches it was
never meant to touch. theorem_terminator() offers both readings, "unify"
(the permissive one) and "instance" (one-way matching), and picks
neither as the right answer.
"""

from dataclasses import dataclass
from itertools import chain
from typing import Any, Callable, Iterator, Optional

from ..core.store import KnowledgeStore, as_environment
from ..core.terms import (
    ARROW, judgment, unify, match_instance, apply_substitution,
    rename_apart, fresh_variable,
)
from ..core.nondet import first
from .backward import backward, check_depth, check_query


@dataclass(frozen=True)
class Control:
    """A bundle of the three plug points plus the initial context."""
    abs_update: Callable
    arg_update: Callable
    terminate: Callable
    ctx: Any = None

    def run(self, store: KnowledgeStore, query, **kwargs) -> Iterator:
        return controlled_backward(
            store, self.abs_update, self.arg_update, self.terminate,
            self.ctx, query, **kwargs,
        )


def controlled_solve(
    store, abs_update, arg_update, terminate, ctx, query,
    sub=None, env=None, budget=None, recheck_matches=False, trace=None,
) -> Iterator[dict]:
    """Substitution-threading form of controlled_backward."""
    if sub is None:
        sub = {}
    env = as_environment(env)
    if trace is not None:
        trace("goal", ctx, apply_substitution(sub, query))

    for result in chain(store.match(query, sub), env.match(query, sub)):
        matched = apply_substitution(result, query)
        if recheck_matches and terminate(matched, ctx):
            if trace is not None:
                trace("prune", ctx, matched)
            continue
        if trace is not None:
            trace("match", ctx, matched)
        yield result

    if budget is not None and budget <= 0:
        return

    _, proof, theorem = query
    abs_var, arg_var = fresh_variable("abs"), fresh_variable("arg")
    s = unify(proof, (abs_var, arg_var), sub)
    if s is None:
        return

    node = apply_substitution(s, query)
    if terminate(node, ctx):
        if trace is not None:
            trace("prune", ctx, node)
        return
    if trace is not None:
        trace("expand", ctx, node)

    abs_ctx = abs_update(node, ctx)
    arg_ctx = arg_update(node, ctx)
    next_budget = None if budget is None else budget - 1

    prms = fresh_variable("prms")
    abs_goal = judgment(abs_var, (ARROW, prms, theorem))
    arg_goal = judgment(arg_var, prms)
    for s1 in controlled_solve(
        store, abs_update, arg_update, terminate, abs_ctx, abs_goal,
        s, env, next_budget, recheck_matches, trace,
    ):
        yield from controlled_solve(
            store, abs_update, arg_update, terminate, arg_ctx, arg_goal,
            s1, env, next_budget, recheck_matches, trace,
        )


def controlled_backward(
    store: KnowledgeStore,
    abs_update: Callable,
    arg_update: Callable,
    terminate: Callable,
    ctx,
    query,
    env=(),
    max_depth: Optional[int] = None,
    recheck_matches: bool = False,
    trace: Optional[Callable] = None,
) -> Iterator:
    """
    Backward chaining where the caller decides when to stop expanding.

    Args:
        store:            knowledge store
        abs_update:       abs_update(query, ctx) -> context for the abstraction subgoal
        arg_update:       arg_update(query, ctx) -> context for the argument subgoal
        terminate:        terminate(query, ctx) -> bool, True stops expansion
        ctx:              initial context, any value
        query:            (":", proof, theorem)
        env:              local typing facts
        max_depth:        optional hard depth backstop on top of terminate;
                          without it a terminate that never fires on an
                          expandable branch recurses until Python gives up
        recheck_matches:  also drop base-case matches that satisfy terminate
        trace:            optional trace(event, ctx, term) callback
    """
    check_query(query)
    if max_depth is not None:
        check_depth(max_depth)
    return (
        apply_substitution(sub, query)
        for sub in controlled_solve(
            store, abs_update, arg_update, terminate, ctx, query,
            {}, as_environment(env), max_depth, recheck_matches, trace,
        )
    )


# ── Presets ──────────────────────────────────────────────────────────────────

def decrement(query, ctx):
    return ctx - 1


def exhausted(query, ctx) -> bool:
    return ctx <= 0


def depth_control(depth: int) -> Control:
    """Plain depth bounding: same results as backward(store, depth, q)."""
    check_depth(depth)
    return Control(decrement, decrement, exhausted, depth)


def never(query, ctx) -> bool:
    return False


def always(query, ctx) -> bool:
    return True


def theorem_terminator(pattern, mode: str = "unify") -> Callable:
    """
    Stop expanding any node whose target theorem looks like pattern.

    mode="unify":     the theorem unifies with pattern. An unbound target
                      unifies with anything and is cut too.
    mode="instance":  the theorem is an instance of pattern; variables in
                      the target are never bound.
    """
    if mode not in ("unify", "instance"):
        raise ValueError(f"mode must be 'unify' or 'instance', got {mode!r}")

    def terminate(query, ctx) -> bool:
        theorem = query[2]
        if mode == "unify":
            return unify(theorem, rename_apart(pattern)) is not None
        return match_instance(pattern, theorem) is not None

    return terminate


def combine_terminators(*predicates) -> Callable:
    """Terminate when any of predicates does."""
    def terminate(query, ctx) -> bool:
        return any(p(query, ctx) for p in predicates)
    return terminate


def depth_and_target_control(depth: int, pattern, mode: str = "unify") -> Control:
    """Depth bound plus a target-shape cut-off."""
    check_depth(depth)
    return Control(
        decrement, decrement,
        combine_terminators(exhausted, theorem_terminator(pattern, mode)),
        depth,
    )


# ── Meta-level control ───────────────────────────────────────────────────────

TERMINATE = "Terminate"
ZERO, SUCC = "Z", "S"


def peano(n: int):
    """peano(2) == ("S", ("S", "Z"))."""
    check_depth(n)
    result = ZERO
    for _ in range(n):
        result = (SUCC, result)
    return result


def peano_predecessor(query, ctx):
    """(S k) -> k. Z stays Z."""
    if isinstance(ctx, tuple) and len(ctx) == 2 and ctx[0] == SUCC:
        return ctx[1]
    return ZERO


def termination_goal(query, ctx):
    return judgment("$why", (TERMINATE, query, ctx))


def nested_terminator(
    control_store: KnowledgeStore,
    depth: int = 0,
    make_goal: Callable = termination_goal,
) -> Callable:
    """
    Terminate when a nested backward search proves it.

    The control store holds termination axioms, e.g.
        (: spent (Terminate $q Z))
    and terminate(query, ctx) holds iff make_goal(query, ctx) has a proof
    in control_store within depth. The context must be a term.
    """
    check_depth(depth)

    def terminate(query, ctx) -> bool:
        return first(backward(control_store, depth, make_goal(query, ctx))) is not None

    return terminate


def peano_control_store() -> KnowledgeStore:
    """Termination axioms for a Peano-counted depth budget."""
    return KnowledgeStore(
        [judgment("spent", (TERMINATE, "$q", ZERO))],
        name="control",
    )


def nested_depth_control(depth: int, control_store: Optional[KnowledgeStore] = None) -> Control:
    """
    Depth bounding decided by proof search in a control store.

    The context is a Peano numeral; each expansion takes its predecessor
    and the control store proves when the budget is spent.
    """
    if control_store is None:
        control_store = peano_control_store()
    return Control(
        peano_predecessor, peano_predecessor,
        nested_terminator(control_store), peano(depth),
    )
