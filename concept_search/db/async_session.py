"""Async SQLAlchemy engine and session management.

On asyncpg the driver's ``command_timeout`` is set from
``SEARCH_TIMEOUT_SECONDS``, so a single statement cannot outlive the search
deadline the service enforces.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from concept_search.core.config import settings
from concept_search.core.search_config import SearchTuning, search_tuning

ASYNCPG_SCHEME = "postgresql+asyncpg://"


def _to_async_uri(uri: str) -> str:
    if uri.startswith(ASYNCPG_SCHEME):
        return uri
    for scheme in ("postgresql+psycopg2://", "postgresql://", "postgres://"):
        if uri.startswith(scheme):
            return ASYNCPG_SCHEME + uri[len(scheme):]
    return uri


def engine_options(uri: str, tuning: SearchTuning = search_tuning) -> Dict[str, Any]:
    options: Dict[str, Any] = {"pool_pre_ping": True, "pool_recycle": 1800}
    if uri.startswith(ASYNCPG_SCHEME) and tuning.default_timeout is not None:
        options["connect_args"] = {"command_timeout": tuning.default_timeout}
    return options


_async_uri = _to_async_uri(settings.sqlalchemy_database_uri)

async_engine = create_async_engine(_async_uri, **engine_options(_async_uri))

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as db:
        yield db
