"""FastAPI router for concept search.

Thin HTTP adapter over :class:`ConceptSearchService`; the search itself is
transport-agnostic.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from concept_search.db.async_session import get_async_db
from concept_search.repositories.concept_index_repository import ConceptIndexRepository
from concept_search.repositories.relationship_repository import RelationshipRepository
from concept_search.schemas.concept_search import ConceptSearchRow, DomainPolicyEntry, IndexHealthResponse
from concept_search.services import domain_policy
from concept_search.services.concept_search_service import ConceptSearchService
from concept_search.services.errors import RetrievalError, SearchTimeoutError, ValidationError
from concept_search.services.index_state import check_concept_search_ready

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/concepts", tags=["concept-search"])


def get_concept_search_service(db: AsyncSession = Depends(get_async_db)) -> ConceptSearchService:
    return ConceptSearchService(
        index=ConceptIndexRepository(db),
        relationships=RelationshipRepository(db),
    )


@router.get("/search", response_model=List[ConceptSearchRow])
async def search_concepts(
    query: str = Query(..., description="Free text, concept code or concept id"),
    domain: str = Query(..., description="Clinical domain, e.g. Condition or Drug"),
    service: ConceptSearchService = Depends(get_concept_search_service),
) -> List[ConceptSearchRow]:
    try:
        return await service.search(query, domain)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except SearchTimeoutError as exc:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(exc)) from exc
    except RetrievalError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


@router.get("/domains", response_model=List[DomainPolicyEntry])
def list_domains() -> List[DomainPolicyEntry]:
    entries = []
    for domain in domain_policy.registered_domains():
        rule = domain_policy.rule_for(domain)
        class_filter = rule.class_filter
        entries.append(
            DomainPolicyEntry(
                domain=domain,
                vocabularies=sorted(rule.vocabularies),
                concept_classes=sorted(class_filter.concept_classes) if class_filter else [],
                class_exempt_vocabularies=sorted(class_filter.exempt_vocabularies) if class_filter else [],
            )
        )
    return entries


@router.get("/health", response_model=IndexHealthResponse)
async def index_health(db: AsyncSession = Depends(get_async_db)) -> IndexHealthResponse:
    readiness = await check_concept_search_ready(db)
    body = IndexHealthResponse(
        ready=readiness.ready,
        table_exists=readiness.table_exists,
        populated=readiness.populated,
        has_search_index=readiness.has_search_index,
        error=readiness.error,
    )
    if not readiness.ready:
        logger.warning("concept_search index not ready: %s", body.model_dump())
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=body.model_dump())
    return body
