"""Concept search service.

Pipeline for one ``(query, domain)`` request:

1. **Validate** the input; nothing is fetched for a rejected request.
2. **Retrieve** candidates from the concept index, restricted by the domain
   vocabulary policy.  Unregistered domains short-circuit to ``[]``.
3. **Resolve** every candidate's ``Maps to`` edges in batched lookups.
4. **Classify** exact-id / exact-code / name-length signals per candidate.
5. **Rank** on the fixed priority tuple and truncate to ``RESULT_LIMIT``.

Steps 2-3 run under the caller's deadline; when it expires a
:class:`SearchTimeoutError` is raised and no rows are returned.  A collaborator
that times out on its own surfaces as a plain :class:`RetrievalError`.  The service
holds no mutable state, so one instance may serve concurrent requests.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from concept_search.core.search_config import (
    RESULT_LIMIT,
    SearchFeatureFlags,
    SearchTuning,
    search_feature_flags,
    search_tuning,
)
from concept_search.models.concept_relationship import MAPS_TO
from concept_search.repositories.concept_index_repository import ConceptCandidate
from concept_search.repositories.relationship_repository import MappingEdge
from concept_search.schemas.concept_search import ConceptSearchRow
from concept_search.services import domain_policy
from concept_search.services.domain_policy import DomainRule
from concept_search.services.errors import RetrievalError, SearchTimeoutError, ValidationError
from concept_search.services.match_classifier import classify
from concept_search.services.result_ranker import RankedConcept, rank
from concept_search.services.standardization import resolve

logger = logging.getLogger(__name__)


class ConceptIndex(Protocol):
    async def query(self, domain: str, substring: str, rule: DomainRule) -> List[ConceptCandidate]: ...


class RelationshipStore(Protocol):
    async def lookup_many(self, source_ids: Iterable[int], kind: str = MAPS_TO) -> Dict[int, List[MappingEdge]]: ...


@dataclass
class SearchEvent:
    """Lightweight event emitted after every search for structured logging."""

    query: str
    domain: str
    candidate_count: int
    result_count: int
    duration_ms: float
    top_concept_id: Optional[int] = None


def validate_request(query: Optional[str], domain: Optional[str], *, min_query_length: int = 2) -> None:
    if len((query or "").strip()) < min_query_length:
        raise ValidationError("query too short")
    if not (domain or "").strip():
        raise ValidationError("domain required")


class ConceptSearchService:
    def __init__(
        self,
        index: ConceptIndex,
        relationships: RelationshipStore,
        *,
        flags: SearchFeatureFlags = search_feature_flags,
        tuning: SearchTuning = search_tuning,
    ) -> None:
        self._index = index
        self._relationships = relationships
        self._flags = flags
        self._tuning = tuning

    async def search(
        self,
        query: str,
        domain: str,
        *,
        timeout: Optional[float] = None,
    ) -> List[ConceptSearchRow]:
        """Return ranked rows for ``query`` within ``domain``.

        ``timeout`` is in seconds; ``None`` uses ``SEARCH_TIMEOUT_SECONDS`` and
        a value of zero or less disables the deadline.
        """
        validate_request(query, domain, min_query_length=self._tuning.min_query_length)

        t0 = time.perf_counter()
        if timeout is None:
            timeout = self._tuning.default_timeout
        elif timeout <= 0:
            timeout = None

        rule = domain_policy.rule_for(domain)
        if rule is None:
            logger.info("concept_search.search unregistered domain=%r; returning []", domain)
            self._emit_search_event(SearchEvent(query, domain, 0, 0, self._elapsed_ms(t0)))
            return []

        deadline = time.monotonic() + timeout if timeout is not None else None
        try:
            candidates, edges = await asyncio.wait_for(self._collect(query, domain, rule), timeout=timeout)
        except asyncio.TimeoutError as exc:
            logger.warning("concept_search.search timed out query=%r domain=%r timeout=%s", query, domain, timeout)
            raise SearchTimeoutError(timeout) from exc
        except RetrievalError:
            logger.warning("concept_search.search retrieval failed query=%r domain=%r", query, domain)
            raise

        if deadline is not None and time.monotonic() >= deadline:
            logger.warning("concept_search.search finished past deadline query=%r domain=%r timeout=%s", query, domain, timeout)
            raise SearchTimeoutError(timeout)

        ranked = rank(
            [
                RankedConcept(
                    resolved=resolve(candidate, edges.get(candidate.concept_id, ())),
                    signals=classify(query, candidate),
                )
                for candidate in candidates
            ],
            limit=RESULT_LIMIT,
        )
        rows = [self._to_row(item) for item in ranked]

        self._emit_search_event(
            SearchEvent(
                query=query,
                domain=domain,
                candidate_count=len(candidates),
                result_count=len(rows),
                duration_ms=self._elapsed_ms(t0),
                top_concept_id=rows[0].searched_concept_id if rows else None,
            )
        )
        return rows

    async def _collect(
        self,
        query: str,
        domain: str,
        rule: DomainRule,
    ) -> Tuple[List[ConceptCandidate], Dict[int, List[MappingEdge]]]:
        # A driver-side timeout (e.g. asyncpg command_timeout) is a collaborator
        # failure, not expiry of this search's deadline.
        try:
            candidates = await self._index.query(domain, query, rule)
        except asyncio.TimeoutError as exc:
            logger.exception("concept_search.collect index timed out domain=%r query=%r", domain, query)
            raise RetrievalError("concept index unavailable") from exc
        if self._flags.debug_search:
            logger.info("concept_search.collect domain=%r query=%r candidates=%s", domain, query, len(candidates))
        if not candidates:
            return candidates, {}

        try:
            edges = await self._relationships.lookup_many(
                [candidate.concept_id for candidate in candidates],
                kind=MAPS_TO,
            )
        except asyncio.TimeoutError as exc:
            logger.exception("concept_search.collect relationship lookup timed out candidates=%s", len(candidates))
            raise RetrievalError("relationship store unavailable") from exc
        return candidates, edges

    @staticmethod
    def _to_row(item: RankedConcept) -> ConceptSearchRow:
        resolved = item.resolved
        candidate = resolved.candidate
        return ConceptSearchRow(
            standard_name=resolved.standard_name,
            standard_concept_id=resolved.standard_concept_id,
            standard_code=resolved.standard_code,
            standard_vocabulary=resolved.standard_vocabulary,
            standard_concept_class=resolved.standard_concept_class,
            searched_name=candidate.concept_name,
            searched_concept_id=candidate.concept_id,
            searched_code=candidate.concept_code,
            searched_vocabulary=candidate.vocabulary_id,
            searched_concept_class=candidate.concept_class_id,
            searched_term=resolved.searched_term,
        )

    @staticmethod
    def _elapsed_ms(t0: float) -> float:
        return round((time.perf_counter() - t0) * 1000, 2)

    def _emit_search_event(self, event: SearchEvent) -> None:
        if not self._flags.enable_search_logging:
            return

        logger.info(
            "search_event query=%r domain=%r candidates=%d results=%d duration_ms=%.2f top_concept_id=%s",
            event.query,
            event.domain,
            event.candidate_count,
            event.result_count,
            event.duration_ms,
            event.top_concept_id if event.top_concept_id is not None else "-",
        )
