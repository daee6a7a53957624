"""
Chaining: depth-bounded backward and forward chaining over curried typed terms.

A miniature logic-programming engine. Queries, facts and rules are all
typed judgments (: proof theorem); a proof of a conclusion is built by
applying a rule's constructor to proofs of its premises, one curried
argument at a time. Search is non-deterministic: every chainer yields
a lazy sequence of alternatives.

Usage:
    python -m chaining --domain modus_ponens
    python -m chaining --domain modus_ponens --mode forward --depth 2
    python -m chaining --domain modus_ponens --mode lemmas --depth 2 --rounds 1
    python -m chaining --domain conjunction --depth 3
    python -m chaining --domain deduction --depth 3
"""

from .core.terms import (
    is_variable, judgment, arrow, apply_curried, unify,
    apply_substitution, canonical, format_term,
)
from .core.store import KnowledgeStore, Environment
from .core.nondet import collapse, superpose
from .core.proof import proof_tree, proof_steps, print_proof
from .inference.backward import backward
from .inference.forward import forward
from .inference.iterate import (
    iterate_backward, iterate_forward, insert_if_absent,
    synthesize_lemmas, prove_with_lemmas,
)
from .inference.control import (
    Control, controlled_backward, depth_control, theorem_terminator,
    nested_terminator, nested_depth_control,
)

__all__ = [
    "is_variable", "judgment", "arrow", "apply_curried", "unify",
    "apply_substitution", "canonical", "format_term",
    "KnowledgeStore", "Environment",
    "collapse", "superpose",
    "proof_tree", "proof_steps", "print_proof",
    "backward", "forward",
    "iterate_backward", "iterate_forward", "insert_if_absent",
    "synthesize_lemmas", "prove_with_lemmas",
    "Control", "controlled_backward", "depth_control", "theorem_terminator",
    "nested_terminator", "nested_depth_control",
]
