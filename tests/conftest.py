"""Shared fixtures: the vocabulary and in-memory collaborators from
``tests.fakes`` and an async SQLite database seeded with the same rows."""

from __future__ import annotations

from typing import List

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from concept_search.db.models import Base, Concept
from concept_search.models.concept_search import project_search_entry

from tests.fakes import FakeConceptIndex, FakeRelationshipStore, vocabulary_concepts, vocabulary_relationships


@pytest.fixture
def concepts() -> List[Concept]:
    return vocabulary_concepts()


@pytest.fixture
def fake_index(concepts) -> FakeConceptIndex:
    return FakeConceptIndex(concepts)


@pytest.fixture
def fake_relationships(concepts) -> FakeRelationshipStore:
    return FakeRelationshipStore(concepts, vocabulary_relationships())


@pytest.fixture
async def db_session():
    """Async SQLite session with the vocabulary tables created and seeded."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        seeded = vocabulary_concepts()
        session.add_all(seeded)
        session.add_all(vocabulary_relationships())
        session.add_all([project_search_entry(c) for c in seeded])
        await session.commit()

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def empty_db_session():
    """Async SQLite session with the tables created but no rows."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(bind=engine, expire_on_commit=False)() as session:
        yield session

    await engine.dispose()
