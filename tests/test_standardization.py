"""Tests for standard-concept resolution and row field assembly."""

from concept_search.repositories.concept_index_repository import ConceptCandidate
from concept_search.repositories.relationship_repository import MappingEdge
from concept_search.services.standardization import MappingTier, resolve, resolve_standard_target


def candidate(concept_id=45000001, standard=None, name="Lisinopril 10mg tablet", code="00093111101"):
    return ConceptCandidate(
        concept_id=concept_id,
        concept_name=name,
        concept_code=code,
        vocabulary_id="NDC",
        concept_class_id="11-digit NDC",
        standard_concept=standard,
    )


def edge(target_id, standard="S", source_id=45000001):
    return MappingEdge(
        source_concept_id=source_id,
        target_concept_id=target_id,
        target_name=f"target {target_id}",
        target_code=f"T{target_id}",
        target_vocabulary="RxNorm",
        target_concept_class="Clinical Drug",
        target_standard_concept=standard,
    )


class TestResolveStandardTarget:
    def test_no_edges(self):
        assert resolve_standard_target([]) is None

    def test_non_standard_targets_ignored(self):
        assert resolve_standard_target([edge(10, standard=None), edge(11, standard="C")]) is None

    def test_single_standard_target(self):
        target = resolve_standard_target([edge(10, standard=None), edge(12)])
        assert target.concept_id == 12
        assert target.concept_name == "target 12"
        assert target.vocabulary_id == "RxNorm"
        assert target.concept_class_id == "Clinical Drug"

    def test_multiple_standard_targets_pick_lowest_id(self):
        assert resolve_standard_target([edge(30), edge(12), edge(20)]).concept_id == 12
        assert resolve_standard_target([edge(12), edge(20), edge(30)]).concept_id == 12


class TestResolvedConcept:
    def test_mapped_candidate_uses_target_fields(self):
        resolved = resolve(candidate(), [edge(1308217)])
        assert resolved.mapping_tier == MappingTier.MAPPED_STANDARD
        assert resolved.standard_concept_id == 1308217
        assert resolved.standard_name == "target 1308217"
        assert resolved.standard_code == "T1308217"
        assert resolved.standard_vocabulary == "RxNorm"
        assert resolved.standard_concept_class == "Clinical Drug"

    def test_standard_candidate_without_mapping_uses_itself(self):
        resolved = resolve(candidate(concept_id=1308216, standard="S", name="Lisinopril", code="29046"), [])
        assert resolved.mapping_tier == MappingTier.ALREADY_STANDARD
        assert resolved.standard_concept_id == 1308216
        assert resolved.standard_name == "Lisinopril"

    def test_unmapped_classification_uses_itself(self):
        resolved = resolve(candidate(concept_id=21601783, standard="C", name="lisinopril", code="C09AA03"), [])
        assert resolved.mapping_tier == MappingTier.UNMAPPED
        assert resolved.standard_concept_id == 21601783
        assert resolved.standard_code == "C09AA03"

    def test_searched_term_echoes_candidate(self):
        resolved = resolve(candidate(), [edge(1308217)])
        assert resolved.searched_term == "45000001 00093111101 Lisinopril 10mg tablet"
        assert resolved.candidate.concept_id == 45000001
