from .terms import (
    is_variable, is_symbol, is_compound, is_application, is_judgment,
    judgment, arrow, apply_curried, occurs_in, variables_of, is_ground,
    apply_substitution, unify, match_instance, rename_apart,
    canonical, is_variant, format_term,
)
from .store import KnowledgeStore, Environment
from .nondet import collapse, superpose, bind, first, take
from .proof import proof_tree, proof_steps, axioms_used, proof_size, print_proof

__all__ = [
    "is_variable", "is_symbol", "is_compound", "is_application", "is_judgment",
    "judgment", "arrow", "apply_curried", "occurs_in", "variables_of", "is_ground",
    "apply_substitution", "unify", "match_instance", "rename_apart",
    "canonical", "is_variant", "format_term",
    "KnowledgeStore", "Environment",
    "collapse", "superpose", "bind", "first", "take",
    "proof_tree", "proof_steps", "axioms_used", "proof_size", "print_proof",
]
