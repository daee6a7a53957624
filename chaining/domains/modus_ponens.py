"""
Domain: Modus ponens over an implication chain.

Implications are data, written with "==>", and the only rule turning an
implication into a function is ModusPonens:

    ab          : (==> A B)
    bc          : (==> B C)
    a           : A
    ModusPonens : (-> (==> $p $q) (-> $p $q))

Proofs:
    a                                        : A    depth 0
    ((ModusPonens ab) a)                     : B    depth 2
    ((ModusPonens bc) ((ModusPonens ab) a))  : C    depth 3

Forward from a : A at depth 2 reaches B. Iterating at depth 2 reaches C
once B's proof has been committed to the store.
"""

from ..core.store import KnowledgeStore
from ..core.terms import judgment, arrow


IMPLIES = "==>"
MODUS_PONENS = "ModusPonens"

MODUS_PONENS_RULE = judgment(
    MODUS_PONENS,
    arrow((IMPLIES, "$p", "$q"), "$p", "$q"),
)


def implication(name: str, premise, conclusion):
    return judgment(name, (IMPLIES, premise, conclusion))


def make_implication_chain(*theorems, base: str = "a") -> KnowledgeStore:
    """
    An implication chain T0 ==> T1 ==> ... ==> Tn with a proof of T0.

    Implication names are the lowercase concatenation of their ends:
    make_implication_chain("A", "B", "C") holds ab, bc, a and ModusPonens.
    """
    store = KnowledgeStore(name="modus_ponens")
    for premise, conclusion in zip(theorems, theorems[1:]):
        store.add(implication(
            f"{premise.lower()}{conclusion.lower()}", premise, conclusion,
        ))
    if theorems:
        store.add(judgment(base, theorems[0]))
    store.add(MODUS_PONENS_RULE)
    return store


def make_modus_ponens_store() -> KnowledgeStore:
    """The three-fact chain: ab, bc, a, plus ModusPonens."""
    return make_implication_chain("A", "B", "C")


def mp(implication_proof, premise_proof):
    """((ModusPonens implication_proof) premise_proof)."""
    return ((MODUS_PONENS, implication_proof), premise_proof)


QUERY = judgment("$prf", "C")
SOURCE = judgment("a", "A")
