"""
Integration tests for the deduction domain: composition by abstraction.
"""

import pytest

from chaining.core.terms import arrow
from chaining.core.proof import proof_tree
from chaining.inference.backward import backward
from chaining.domains import DOMAINS, get_domain
from chaining.domains.deduction import make_deduction_store, QUERY


def composed(results):
    return [
        r for r in results
        if r[1][0] == "λ" and r[1][2] == ("g", ("f", r[1][1]))
    ]


class TestComposition:
    def test_found_with_abstraction(self):
        store = make_deduction_store()
        results = list(backward(store, 3, QUERY, lambda_intro=True))
        assert composed(results)

    def test_needs_depth_three(self):
        store = make_deduction_store()
        assert not composed(backward(store, 2, QUERY, lambda_intro=True))

    def test_proof_tree_binds_hypothesis(self):
        store = make_deduction_store()
        [item] = composed(backward(store, 3, QUERY, lambda_intro=True))[:1]
        head, children = proof_tree(item[1])
        assert head.startswith("λ ")
        assert children[0][0] == "g"

    def test_theorem_is_instantiated(self):
        store = make_deduction_store()
        for item in backward(store, 3, QUERY, lambda_intro=True):
            assert item[2] == arrow("A", "C")


class TestRegistry:
    @pytest.mark.parametrize("name", sorted(DOMAINS))
    def test_every_domain_proves_its_query(self, name):
        domain = get_domain(name)
        store = domain["make_store"]()
        options = domain.get("options", {})
        assert list(backward(store, domain["depth"], domain["query"], **options))

    def test_unknown_domain(self):
        with pytest.raises(KeyError):
            get_domain("nope")
