"""
Domain registry.

Each domain is a dict describing a knowledge base and its default run:
    make_store:    () -> KnowledgeStore
    query:         judgment to prove backward
    source:        judgment to chain forward from
    depth:         default depth budget
    rounds:        default number of iterative rounds
    options:       extra keyword arguments for backward()  [optional]
    description:   str
"""

from .modus_ponens import make_modus_ponens_store
from .conjunction import make_conjunction_store
from .deduction import make_deduction_store
from . import modus_ponens, conjunction, deduction


DOMAINS = {
    "modus_ponens": {
        "make_store":  make_modus_ponens_store,
        "query":       modus_ponens.QUERY,
        "source":      modus_ponens.SOURCE,
        "depth":       3,
        "rounds":      1,
        "description": "Implication chain A ==> B ==> C with a : A and ModusPonens",
    },
    "conjunction": {
        "make_store":  make_conjunction_store,
        "query":       conjunction.QUERY,
        "source":      conjunction.SOURCE,
        "depth":       3,
        "rounds":      1,
        "description": "AndIntro / AndElim: prove (∧ B A) from c : (∧ A B)",
    },
    "deduction": {
        "make_store":  make_deduction_store,
        "query":       deduction.QUERY,
        "source":      deduction.SOURCE,
        "depth":       3,
        "rounds":      1,
        "options":     {"lambda_intro": True},
        "description": "Compose f : A -> B and g : B -> C by abstraction introduction",
    },
}


def get_domain(name: str) -> dict:
    """Look up a domain. Raises KeyError naming the known domains."""
    try:
        return DOMAINS[name]
    except KeyError:
        raise KeyError(
            f"unknown domain {name!r}; choose from {', '.join(sorted(DOMAINS))}"
        ) from None
