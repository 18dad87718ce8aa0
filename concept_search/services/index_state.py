from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from concept_search.models.concept_search import SEARCH_INDEX_NAME, ConceptSearchEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexReadiness:
    table_exists: bool = False
    populated: bool = False
    has_search_index: bool = False
    error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.table_exists and self.populated and self.has_search_index


def _inspect_search_table(sync_conn) -> tuple[bool, bool]:
    inspector = inspect(sync_conn)
    table = ConceptSearchEntry.__tablename__
    if not inspector.has_table(table):
        return False, False
    index_names = {ix.get("name") for ix in inspector.get_indexes(table)}
    return True, SEARCH_INDEX_NAME in index_names


async def check_concept_search_ready(db: AsyncSession) -> IndexReadiness:
    """Report whether concept_search exists, has rows and carries its search index."""
    try:
        conn = await db.connection()
        table_exists, has_index = await conn.run_sync(_inspect_search_table)
        if not table_exists:
            return IndexReadiness()

        stmt = select(ConceptSearchEntry.concept_id).limit(1)
        populated = (await db.execute(stmt)).first() is not None
        return IndexReadiness(table_exists=True, populated=populated, has_search_index=has_index)
    except SQLAlchemyError as exc:
        logger.exception("Failed to check concept_search state")
        return IndexReadiness(error=type(exc).__name__)
