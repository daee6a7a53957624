"""
Property-based and unit tests for backward chaining.

Core claims:
    - Base-case floor: depth 0 returns exactly the store matches
    - Depth monotonicity: more depth never loses a proof
    - The three-fact chain proves A at 0, B at 2 and C at 3, one proof each
    - A variable proof is expanded into an application; a symbol is not
    - Failure is an empty sequence, never an exception
    - Flat n-ary applications cost one depth level
    - Environment entries are matched after the store, in order
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chaining.core.store import KnowledgeStore, Environment
from chaining.core.terms import judgment, arrow, canonical, match_instance, is_ground
from chaining.inference.backward import backward
from chaining.visualization import TraceCounter
from chaining.domains.modus_ponens import make_modus_ponens_store, mp
from chaining.domains.deduction import make_deduction_store, QUERY as DEDUCTION_QUERY


# ── Helpers ──────────────────────────────────────────────────────────────────

def proofs(store, depth, query, **kwargs) -> set:
    """Distinct results up to variable renaming."""
    return {canonical(r) for r in backward(store, depth, query, **kwargs)}


A_PROOF = judgment("a", "A")
B_PROOF = judgment(mp("ab", "a"), "B")
C_PROOF = judgment(mp("bc", mp("ab", "a")), "C")

QUERIES = [
    judgment("$prf", "A"),
    judgment("$prf", "B"),
    judgment("$prf", "C"),
    judgment("$prf", arrow("A", "B")),
    judgment("$prf", arrow("B", "C")),
    judgment("$prf", ("==>", "$x", "$y")),
    judgment(("ModusPonens", "$i"), "$t"),
    judgment(mp("ab", "a"), "$t"),
    judgment("ab", "$t"),
]


# ── Unit tests: the three-fact chain ─────────────────────────────────────────

class TestThreeFactChain:
    def test_a_at_depth_zero(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 0, judgment("$prf", "A"))) == [A_PROOF]

    def test_b_at_depth_two(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 2, judgment("$prf", "B"))) == [B_PROOF]

    def test_c_at_depth_three(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 3, judgment("$prf", "C"))) == [C_PROOF]

    def test_b_needs_depth_two(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 1, judgment("$prf", "B"))) == []

    def test_c_needs_depth_three(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 2, judgment("$prf", "C"))) == []

    def test_lemma_theorem_at_depth_one(self):
        store = make_modus_ponens_store()
        results = proofs(store, 1, judgment("$prf", arrow("A", "B")))
        assert results == {judgment(("ModusPonens", "ab"), arrow("A", "B"))}

    def test_checking_a_given_proof(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 3, C_PROOF)) == [C_PROOF]

    def test_wrong_proof_fails(self):
        store = make_modus_ponens_store()
        wrong = judgment(mp("ab", mp("bc", "a")), "C")
        assert list(backward(store, 5, wrong)) == []

    def test_store_not_mutated(self):
        store = make_modus_ponens_store()
        before = store.get_all()
        list(backward(store, 3, judgment("$prf", "$thm")))
        assert store.get_all() == before


class TestBaseCase:
    def test_depth_zero_is_store_matches(self):
        store = make_modus_ponens_store()
        query = judgment("$prf", "$thm")
        assert proofs(store, 0, query) == {canonical(r) for r in store.query(query)}

    def test_depth_zero_never_decomposes(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 0, B_PROOF)) == []

    def test_symbol_proof_is_not_expanded(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 4, judgment("ab", "B"))) == []

    def test_no_match_is_empty_not_error(self):
        store = make_modus_ponens_store()
        assert list(backward(store, 3, judgment("$prf", "Unknown"))) == []

    def test_malformed_rule_is_silently_skipped(self):
        store = KnowledgeStore([judgment("weird", "A"), judgment("a", "A")])
        assert list(backward(store, 3, judgment(("weird", "a"), "$t"))) == []


class TestValidation:
    def test_negative_depth(self):
        with pytest.raises(ValueError):
            backward(make_modus_ponens_store(), -1, judgment("$p", "A"))

    def test_non_int_depth(self):
        with pytest.raises(ValueError):
            backward(make_modus_ponens_store(), 1.5, judgment("$p", "A"))

    def test_query_must_be_judgment(self):
        with pytest.raises(ValueError):
            backward(make_modus_ponens_store(), 1, ("$p", "A"))

    def test_arities_must_be_positive(self):
        with pytest.raises(ValueError):
            backward(make_modus_ponens_store(), 1, judgment("$p", "A"), arities=(0,))


class TestMultiplicity:
    def test_each_derivation_is_a_result(self):
        store = make_modus_ponens_store()
        store.add(B_PROOF)
        # B is now both stored and derivable at depth 2.
        results = list(backward(store, 2, judgment("$prf", "B")))
        assert results.count(B_PROOF) == 2


class TestFlatArity:
    def make_store(self):
        return KnowledgeStore([
            judgment("Pair", ("->", "$p", "$q", ("∧", "$p", "$q"))),
            judgment("a", "A"),
            judgment("b", "B"),
        ])

    def test_curried_only_misses_flat_rule(self):
        store = self.make_store()
        assert list(backward(store, 1, judgment("$prf", ("∧", "A", "B")))) == []

    def test_flat_binary_costs_one_level(self):
        store = self.make_store()
        results = list(backward(
            store, 1, judgment("$prf", ("∧", "A", "B")), arities=(1, 2),
        ))
        assert results == [judgment(("Pair", "a", "b"), ("∧", "A", "B"))]


class TestEnvironment:
    def test_environment_matched_at_depth_zero(self):
        store = KnowledgeStore()
        env = [judgment("h", "A")]
        assert list(backward(store, 0, judgment("$x", "A"), env=env)) == [
            judgment("h", "A"),
        ]

    def test_store_before_environment(self):
        store = KnowledgeStore([judgment("a", "A")])
        env = Environment().extend(judgment("h1", "A")).extend(judgment("h2", "A"))
        results = list(backward(store, 0, judgment("$x", "A"), env=env))
        assert [r[1] for r in results] == ["a", "h1", "h2"]

    def test_environment_feeds_recursion(self):
        store = KnowledgeStore([judgment("f", arrow("A", "B"))])
        env = [judgment("h", "A")]
        assert list(backward(store, 1, judgment("$x", "B"), env=env)) == [
            judgment(("f", "h"), "B"),
        ]


class TestAbstractionIntroduction:
    def test_composition(self):
        store = make_deduction_store()
        results = list(backward(store, 3, DEDUCTION_QUERY, lambda_intro=True))
        composed = [
            r for r in results
            if r[1][0] == "λ" and r[1][2] == ("g", ("f", r[1][1]))
        ]
        assert composed
        assert all(r[2] == arrow("A", "C") for r in composed)

    def test_off_by_default(self):
        store = make_deduction_store()
        assert list(backward(store, 3, DEDUCTION_QUERY)) == []

    def test_identity(self):
        store = KnowledgeStore()
        results = list(backward(
            store, 1, judgment("$prf", arrow("A", "A")), lambda_intro=True,
        ))
        assert len(results) == 1
        _, x, body = results[0][1]
        assert body == x

    def test_hypothesis_stays_out_of_store(self):
        store = make_deduction_store()
        list(backward(store, 3, DEDUCTION_QUERY, lambda_intro=True))
        assert len(store) == 2


class TestTrace:
    def test_depth_zero_never_expands(self):
        counter = TraceCounter()
        store = make_modus_ponens_store()
        list(backward(store, 0, judgment("$prf", "$t"), trace=counter))
        assert counter.counts["expand"] == 0
        assert counter.counts["goal"] == 1
        assert counter.counts["match"] == 4

    def test_recursion_traced(self):
        counter = TraceCounter()
        store = make_modus_ponens_store()
        list(backward(store, 2, judgment("$prf", "B"), trace=counter))
        assert counter.counts["expand"] > 0
        assert counter.total > counter.counts["expand"]


# ── Property-based tests ─────────────────────────────────────────────────────

class TestBackwardProperties:

    @settings(max_examples=40, deadline=None)
    @given(st.sampled_from(QUERIES),
           st.integers(min_value=0, max_value=3),
           st.integers(min_value=0, max_value=3))
    def test_depth_monotonicity(self, query, d1, d2):
        """Every proof found at the smaller depth is found at the larger."""
        lo, hi = min(d1, d2), max(d1, d2)
        store = make_modus_ponens_store()
        assert proofs(store, lo, query) <= proofs(store, hi, query)

    @settings(max_examples=20, deadline=None)
    @given(st.sampled_from(QUERIES), st.integers(min_value=0, max_value=3))
    def test_results_are_instances_of_query(self, query, depth):
        """Each result is the query with its variables filled in."""
        store = make_modus_ponens_store()
        for result in backward(store, depth, query):
            assert match_instance(query, result) is not None

    @settings(max_examples=20, deadline=None)
    @given(st.sampled_from(QUERIES), st.integers(min_value=0, max_value=3))
    def test_ground_proofs_recheck(self, query, depth):
        """A ground result re-proves itself at the same depth."""
        store = make_modus_ponens_store()
        for result in backward(store, depth, query):
            if is_ground(result):
                assert result in list(backward(store, depth, result))
