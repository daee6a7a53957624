"""
Domain: Conjunction introduction and elimination.

    AndIntro      : (-> $p (-> $q (∧ $p $q)))
    AndElimLeft   : (-> (∧ $p $q) $p)
    AndElimRight  : (-> (∧ $p $q) $q)
    c             : (∧ A B)

The default goal is commutativity, (∧ B A), proved at depth 3 by

    ((AndIntro (AndElimRight c)) (AndElimLeft c))
"""

from ..core.store import KnowledgeStore
from ..core.terms import judgment, arrow


AND = "∧"

CONJUNCTION_RULES = [
    judgment("AndIntro", arrow("$p", "$q", (AND, "$p", "$q"))),
    judgment("AndElimLeft", arrow((AND, "$p", "$q"), "$p")),
    judgment("AndElimRight", arrow((AND, "$p", "$q"), "$q")),
]


def make_conjunction_store(*facts) -> KnowledgeStore:
    """The conjunction rules plus facts (default: c : (∧ A B))."""
    store = KnowledgeStore(list(CONJUNCTION_RULES), name="conjunction")
    if not facts:
        facts = (judgment("c", (AND, "A", "B")),)
    store.add_all(facts)
    return store


QUERY = judgment("$prf", (AND, "B", "A"))
SOURCE = judgment("c", (AND, "A", "B"))
COMMUTED = (("AndIntro", ("AndElimRight", "c")), ("AndElimLeft", "c"))
