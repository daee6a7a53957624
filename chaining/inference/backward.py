"""
Backward chaining: depth-bounded proof search over curried typed terms.

Given a query (":", proof, theorem) -- either side may contain
variables -- produce every judgment reachable within the depth budget.
Two cases, always both attempted:

    base:       the query unifies with a stored judgment (or a local
                environment entry). Tried at every depth, including 0.
    recursive:  depth > 0 and the proof can be an application
                (abs arg). Search abs : (-> prms theorem) one level
                down, then arg : prms one level down, sharing bindings.

The whole application costs one depth unit, whatever its arity.

Failure is never an exception: a branch that finds nothing simply
contributes no alternatives.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from ..core.store import KnowledgeStore, Environment, as_environment
from ..core.terms import (
    ARROW, LAMBDA, judgment, is_judgment, is_variable,
    unify, apply_substitution, walk,
    fresh_variable, fresh_symbol, format_term,
)


@dataclass(frozen=True)
class SearchOptions:
    """
    arities:       application shapes to expand. 1 is the curried
                   (abs arg); n > 1 is the flat (abs arg1 ... argn)
                   typed by (-> p1 ... pn theorem).
    lambda_intro:  also prove arrow types by (λ x body), moving x : A
                   into the local environment.
    trace:         trace(event, depth, term), called on "goal", "match"
                   and "expand".
    """
    arities: tuple = (1,)
    lambda_intro: bool = False
    trace: Optional[Callable] = None

    def emit(self, event, depth, term):
        if self.trace is not None:
            self.trace(event, depth, term)


def check_depth(depth):
    if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
        raise ValueError(f"depth must be a non-negative int, got {depth!r}")


def check_query(query):
    if not is_judgment(query):
        raise ValueError(f"query must be a typed judgment, got {format_term(query)}")


def solve(
    store: KnowledgeStore,
    depth: int,
    query,
    sub: Optional[dict] = None,
    env: Environment = Environment(),
    options: SearchOptions = SearchOptions(),
) -> Iterator[dict]:
    """
    Yield one substitution per proof of query within depth.

    This is the substitution-threading form the other chainers build
    on; backward() maps the substitutions back onto the query.
    """
    if sub is None:
        sub = {}
    options.emit("goal", depth, apply_substitution(sub, query))

    for result in store.match(query, sub):
        options.emit("match", depth, apply_substitution(result, query))
        yield result
    for result in env.match(query, sub):
        options.emit("match", depth, apply_substitution(result, query))
        yield result

    if depth <= 0:
        return

    for arity in options.arities:
        yield from _expand(store, depth, query, sub, env, options, arity)

    if options.lambda_intro:
        yield from _introduce(store, depth, query, sub, env, options)


def _expand(store, depth, query, sub, env, options, arity):
    _, proof, theorem = query
    abs_var = fresh_variable("abs")
    arg_vars = tuple(fresh_variable("arg") for _ in range(arity))

    s = unify(proof, (abs_var,) + arg_vars, sub)
    if s is None:
        return
    options.emit("expand", depth, apply_substitution(s, query))

    premises = tuple(fresh_variable("prms") for _ in range(arity))
    abs_goal = judgment(abs_var, (ARROW,) + premises + (theorem,))
    arg_goals = [judgment(a, p) for a, p in zip(arg_vars, premises)]

    for s1 in solve(store, depth - 1, abs_goal, s, env, options):
        yield from _arguments(store, depth - 1, arg_goals, s1, env, options)


def _arguments(store, depth, goals, sub, env, options):
    if not goals:
        yield sub
        return
    for s in solve(store, depth, goals[0], sub, env, options):
        yield from _arguments(store, depth, goals[1:], s, env, options)


def _introduce(store, depth, query, sub, env, options):
    # (λ x body) : (-> a b)  if  body : b  with  x : a  in scope
    _, proof, theorem = query
    x, body = fresh_variable("x"), fresh_variable("body")
    a, b = fresh_variable("a"), fresh_variable("b")

    s = unify(proof, (LAMBDA, x, body), sub)
    if s is not None:
        s = unify(theorem, (ARROW, a, b), s)
    if s is None:
        return
    if is_variable(walk(s, x)):
        s = unify(x, fresh_symbol("x"), s)
        if s is None:
            return
    options.emit("expand", depth, apply_substitution(s, query))

    scope = env.extend(apply_substitution(s, judgment(x, a)))
    yield from solve(store, depth - 1, judgment(body, b), s, scope, options)


def backward(
    store: KnowledgeStore,
    depth: int,
    query,
    env=(),
    arities: tuple = (1,),
    lambda_intro: bool = False,
    trace: Optional[Callable] = None,
) -> Iterator:
    """
    Every proof of query reachable within depth, as judgments.

    Args:
        store:         the knowledge store to match against
        depth:         depth budget; 0 allows store matches only
        query:         (":", proof, theorem), variables allowed anywhere
        env:           initial local typing facts (Environment or iterable)
        arities:       application arities to expand, default curried only
        lambda_intro:  prove arrow types by abstraction introduction
        trace:         optional trace(event, depth, term) callback

    Returns a lazy iterator. Alternatives are not deduplicated: each
    distinct derivation path contributes its own result.
    """
    check_depth(depth)
    check_query(query)
    if not arities or any(n < 1 for n in arities):
        raise ValueError(f"arities must be positive, got {arities!r}")
    options = SearchOptions(tuple(arities), lambda_intro, trace)
    env = as_environment(env)
    return (
        apply_substitution(sub, query)
        for sub in solve(store, depth, query, {}, env, options)
    )
