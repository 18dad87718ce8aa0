"""Tests for the result ordering and truncation."""

import random

from concept_search.core.search_config import RESULT_LIMIT
from concept_search.repositories.concept_index_repository import ConceptCandidate
from concept_search.services.match_classifier import MatchSignals
from concept_search.services.result_ranker import RankedConcept, rank
from concept_search.services.standardization import ResolvedConcept, StandardTarget


def item(concept_id, name="name", *, exact_id=False, exact_code=False, tier=2, delta=0):
    candidate = ConceptCandidate(
        concept_id=concept_id,
        concept_name=name,
        concept_code=str(concept_id),
        vocabulary_id="SNOMED",
        concept_class_id="Clinical Finding",
        standard_concept="S" if tier == 1 else None,
    )
    target = StandardTarget(1, "target", "T", "SNOMED", "Clinical Finding") if tier == 0 else None
    return RankedConcept(
        resolved=ResolvedConcept(candidate=candidate, target=target),
        signals=MatchSignals(exact_id_match=exact_id, exact_code_match=exact_code, name_length_delta=delta),
    )


def ids(items):
    return [i.resolved.candidate.concept_id for i in items]


class TestRankOrder:
    def test_exact_id_dominates_everything(self):
        a = item(1, "zzz", exact_id=True, tier=2, delta=99)
        b = item(2, "aaa", exact_code=True, tier=0, delta=0)
        assert ids(rank([b, a])) == [1, 2]

    def test_exact_code_beats_better_mapping_tier(self):
        a = item(1, "zzz", exact_code=True, tier=2, delta=50)
        b = item(2, "aaa", tier=0, delta=0)
        assert ids(rank([b, a])) == [1, 2]

    def test_mapping_tier_before_length_delta(self):
        mapped = item(1, tier=0, delta=30)
        standard = item(2, tier=1, delta=0)
        unmapped = item(3, tier=2, delta=0)
        assert ids(rank([unmapped, standard, mapped])) == [1, 2, 3]

    def test_length_delta_before_name(self):
        assert ids(rank([item(1, "aaa", delta=5), item(2, "zzz", delta=1)])) == [2, 1]

    def test_name_then_id_break_ties(self):
        items = [item(3, "beta"), item(2, "alpha"), item(1, "beta")]
        assert ids(rank(items)) == [2, 1, 3]

    def test_order_independent_of_input_order(self):
        items = [item(i, f"n{i % 7}", tier=i % 3, delta=i % 5, exact_code=i % 11 == 0) for i in range(60)]
        expected = ids(rank(items))
        shuffled = list(items)
        random.Random(4).shuffle(shuffled)
        assert ids(rank(shuffled)) == expected


class TestRankLimit:
    def test_truncates_to_result_limit(self):
        items = [item(i) for i in range(RESULT_LIMIT + 250)]
        assert len(rank(items)) == RESULT_LIMIT

    def test_returns_all_when_fewer(self):
        assert len(rank([item(1), item(2)])) == 2

    def test_limit_cannot_exceed_result_limit(self):
        items = [item(i) for i in range(RESULT_LIMIT + 5)]
        assert len(rank(items, limit=RESULT_LIMIT + 5)) == RESULT_LIMIT
