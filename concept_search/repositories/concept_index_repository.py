"""Repository for the ``concept_search`` projection.

Serves candidate retrieval: every entry of a domain whose vocabulary is
permitted by the domain rule and whose upper-cased search text contains the
upper-cased query.  No ordering is applied here; ranking happens in the
service layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from concept_search.models.concept import StandardConcept
from concept_search.models.concept_search import ConceptSearchEntry
from concept_search.services.domain_policy import DomainRule
from concept_search.services.errors import RetrievalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConceptCandidate:
    """A single candidate row coming from concept_search."""

    concept_id: int
    concept_name: str
    concept_code: str
    vocabulary_id: str
    concept_class_id: str
    standard_concept: Optional[str] = None

    @property
    def is_standard(self) -> bool:
        return self.standard_concept == StandardConcept.STANDARD.value


class ConceptIndexRepository:
    """Async read-only access to concept_search."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def query(self, domain: str, substring: str, rule: DomainRule) -> List[ConceptCandidate]:
        entry = ConceptSearchEntry
        conditions = [
            entry.domain_id == domain,
            entry.vocabulary_id.in_(sorted(rule.vocabularies)),
            # LIKE '%<QUERY>%' with wildcards in the query escaped
            entry.search_text_upper.contains(substring.upper(), autoescape=True),
        ]

        class_filter = rule.class_filter
        if class_filter is not None:
            admitted = [entry.concept_class_id.in_(sorted(class_filter.concept_classes))]
            if class_filter.exempt_vocabularies:
                admitted.append(entry.vocabulary_id.in_(sorted(class_filter.exempt_vocabularies)))
            conditions.append(or_(*admitted))

        stmt = select(
            entry.concept_id,
            entry.concept_name,
            entry.concept_code,
            entry.vocabulary_id,
            entry.concept_class_id,
            entry.standard_concept,
        ).where(*conditions)

        try:
            rows = (await self._db.execute(stmt)).all()
        except SQLAlchemyError as exc:
            logger.exception("concept_search.query failed domain=%r", domain)
            raise RetrievalError("concept index unavailable") from exc

        return [
            ConceptCandidate(
                concept_id=int(r.concept_id),
                concept_name=r.concept_name or "",
                concept_code=r.concept_code or "",
                vocabulary_id=r.vocabulary_id,
                concept_class_id=r.concept_class_id,
                standard_concept=r.standard_concept,
            )
            for r in rows
        ]
