"""Pre-flight check for a deployed concept_search index.

Verifies that the table exists, is populated and carries its search index,
then runs a timed smoke search.  Exits non-zero when the index is not ready
or the smoke search fails.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time

from sqlalchemy.ext.asyncio import AsyncSession

from concept_search.db.async_session import AsyncSessionLocal, async_engine
from concept_search.repositories.concept_index_repository import ConceptIndexRepository
from concept_search.repositories.relationship_repository import RelationshipRepository
from concept_search.services.concept_search_service import ConceptSearchService
from concept_search.services.errors import ConceptSearchError
from concept_search.services.index_state import check_concept_search_ready

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def run_check(db: AsyncSession, query: str, domain: str) -> bool:
    readiness = await check_concept_search_ready(db)
    if not readiness.table_exists:
        logger.error("concept_search table does not exist; create it first")
        return False
    if not readiness.populated:
        logger.error("concept_search table is empty; populate it first")
        return False
    if not readiness.has_search_index:
        logger.error("required index ix_concept_search_domain_upper is missing")
        return False
    logger.info("concept_search table exists, is populated and indexed")

    service = ConceptSearchService(
        index=ConceptIndexRepository(db),
        relationships=RelationshipRepository(db),
    )
    started = time.perf_counter()
    try:
        rows = await service.search(query, domain)
    except ConceptSearchError:
        logger.exception("smoke search failed query=%r domain=%r", query, domain)
        return False
    duration_ms = (time.perf_counter() - started) * 1000

    logger.info("smoke search query=%r domain=%r rows=%s duration_ms=%.0f", query, domain, len(rows), duration_ms)
    if rows:
        top = rows[0]
        logger.info("top row searched_term=%r standard=%s %r", top.searched_term, top.standard_concept_id, top.standard_name)
    return True


async def _main(query: str, domain: str) -> bool:
    try:
        async with AsyncSessionLocal() as db:
            return await run_check(db, query, domain)
    finally:
        await async_engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Verify the concept_search index and run a smoke search")
    parser.add_argument("--query", default="lisinopril")
    parser.add_argument("--domain", default="Drug")
    args = parser.parse_args()

    _configure_logging()
    ok = asyncio.run(_main(args.query, args.domain))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
