"""Standard-concept resolution.

A searched concept is presented together with the standard concept it maps
to.  Only ``Maps to`` edges whose target is itself standard count.  When a
source has several qualifying targets the one with the lowest concept id is
chosen, so repeated searches always resolve the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

from concept_search.models.concept_search import build_search_text
from concept_search.repositories.concept_index_repository import ConceptCandidate
from concept_search.repositories.relationship_repository import MappingEdge


class MappingTier(IntEnum):
    MAPPED_STANDARD = 0
    ALREADY_STANDARD = 1
    UNMAPPED = 2


@dataclass(frozen=True)
class StandardTarget:
    concept_id: int
    concept_name: str
    concept_code: str
    vocabulary_id: str
    concept_class_id: str


@dataclass(frozen=True)
class ResolvedConcept:
    """A candidate paired with its resolved standard target (if any)."""

    candidate: ConceptCandidate
    target: Optional[StandardTarget]

    @property
    def mapping_tier(self) -> MappingTier:
        if self.target is not None:
            return MappingTier.MAPPED_STANDARD
        if self.candidate.is_standard:
            return MappingTier.ALREADY_STANDARD
        return MappingTier.UNMAPPED

    @property
    def standard_concept_id(self) -> int:
        return self.target.concept_id if self.target else self.candidate.concept_id

    @property
    def standard_name(self) -> str:
        return self.target.concept_name if self.target else self.candidate.concept_name

    @property
    def standard_code(self) -> str:
        return self.target.concept_code if self.target else self.candidate.concept_code

    @property
    def standard_vocabulary(self) -> str:
        return self.target.vocabulary_id if self.target else self.candidate.vocabulary_id

    @property
    def standard_concept_class(self) -> str:
        return self.target.concept_class_id if self.target else self.candidate.concept_class_id

    @property
    def searched_term(self) -> str:
        c = self.candidate
        return build_search_text(c.concept_id, c.concept_code, c.concept_name)


def resolve_standard_target(edges: Iterable[MappingEdge]) -> Optional[StandardTarget]:
    """Pick the standard target among ``Maps to`` edges; lowest id wins ties."""
    qualifying = [edge for edge in edges if edge.target_is_standard]
    if not qualifying:
        return None

    edge = min(qualifying, key=lambda e: e.target_concept_id)
    return StandardTarget(
        concept_id=edge.target_concept_id,
        concept_name=edge.target_name,
        concept_code=edge.target_code,
        vocabulary_id=edge.target_vocabulary,
        concept_class_id=edge.target_concept_class,
    )


def resolve(candidate: ConceptCandidate, edges: Iterable[MappingEdge]) -> ResolvedConcept:
    return ResolvedConcept(candidate=candidate, target=resolve_standard_target(edges))
