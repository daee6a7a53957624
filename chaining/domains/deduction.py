"""
Domain: Function composition by abstraction introduction.

    f : (-> A B)
    g : (-> B C)

Goal (-> A C), which needs a hypothesis: assume x : A, then (g (f x)) : C,
so (λ x (g (f x))) : (-> A C). The hypothesis lives in the search's
local environment, never in the store. Requires lambda_intro=True.
"""

from ..core.store import KnowledgeStore
from ..core.terms import judgment, arrow


def make_deduction_store() -> KnowledgeStore:
    return KnowledgeStore(
        [
            judgment("f", arrow("A", "B")),
            judgment("g", arrow("B", "C")),
        ],
        name="deduction",
    )


QUERY = judgment("$prf", arrow("A", "C"))
SOURCE = judgment("f", arrow("A", "B"))
