"""Repository for ``concept_relationship`` lookups.

Returns every edge of a given kind leaving the source concepts, joined to the
target concept so callers can judge whether the target is standard.  Edges
pointing at concepts missing from ``concept`` are dropped by the join.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from concept_search.core.search_config import search_tuning
from concept_search.models.concept import Concept, StandardConcept
from concept_search.models.concept_relationship import MAPS_TO, ConceptRelationship
from concept_search.services.errors import RetrievalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingEdge:
    source_concept_id: int
    target_concept_id: int
    target_name: str
    target_code: str
    target_vocabulary: str
    target_concept_class: str
    target_standard_concept: Optional[str] = None

    @property
    def target_is_standard(self) -> bool:
        return self.target_standard_concept == StandardConcept.STANDARD.value


class RelationshipRepository:
    def __init__(self, db: AsyncSession, *, batch_size: int | None = None) -> None:
        self._db = db
        self._batch_size = max(1, batch_size or search_tuning.relationship_batch_size)

    async def lookup(self, source_id: int, kind: str = MAPS_TO) -> List[MappingEdge]:
        edges = await self.lookup_many([source_id], kind=kind)
        return edges.get(source_id, [])

    async def lookup_many(self, source_ids: Iterable[int], kind: str = MAPS_TO) -> Dict[int, List[MappingEdge]]:
        """Fetch edges for many sources in ``batch_size`` chunks."""
        ids = sorted(set(source_ids))
        edges: Dict[int, List[MappingEdge]] = {}
        for start in range(0, len(ids), self._batch_size):
            chunk = ids[start : start + self._batch_size]
            for edge in await self._fetch_chunk(chunk, kind):
                edges.setdefault(edge.source_concept_id, []).append(edge)
        return edges

    async def _fetch_chunk(self, source_ids: List[int], kind: str) -> List[MappingEdge]:
        stmt = (
            select(
                ConceptRelationship.concept_id_1,
                Concept.concept_id,
                Concept.concept_name,
                Concept.concept_code,
                Concept.vocabulary_id,
                Concept.concept_class_id,
                Concept.standard_concept,
            )
            .join(Concept, Concept.concept_id == ConceptRelationship.concept_id_2)
            .where(
                ConceptRelationship.concept_id_1.in_(source_ids),
                ConceptRelationship.relationship_id == kind,
            )
        )

        try:
            rows = (await self._db.execute(stmt)).all()
        except SQLAlchemyError as exc:
            logger.exception("concept_relationship.lookup failed sources=%s kind=%r", len(source_ids), kind)
            raise RetrievalError("relationship store unavailable") from exc

        return [
            MappingEdge(
                source_concept_id=int(r.concept_id_1),
                target_concept_id=int(r.concept_id),
                target_name=r.concept_name or "",
                target_code=r.concept_code or "",
                target_vocabulary=r.vocabulary_id,
                target_concept_class=r.concept_class_id,
                target_standard_concept=r.standard_concept,
            )
            for r in rows
        ]
