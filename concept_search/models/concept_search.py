"""SQLAlchemy model for the ``concept_search`` projection.

``concept_search`` is a derived, rebuildable cache over ``concept``: one row
per concept, with the searchable text pre-concatenated and pre-uppercased so
substring lookups can be served from the ``(domain_id, search_text_upper)``
index (plus a pg_trgm GIN index on PostgreSQL).

The table is never authoritative.  Rows must be produced through
:func:`project_search_entry` so ``search_text_upper`` always equals
``search_text.upper()``; a row can only be wrong by being stale.  Rebuilds are
performed by external tooling and must be atomic for readers (a single
transaction, or build-then-rename).
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from concept_search.db.base import Base
from concept_search.models.concept import Concept

SEARCH_INDEX_NAME = "ix_concept_search_domain_upper"


def build_search_text(concept_id: int, concept_code: str | None, concept_name: str | None) -> str:
    """Return ``"<id> <code> <name>"``, the searchable/display form of a concept."""
    return f"{concept_id} {concept_code or ''} {concept_name or ''}"


class ConceptSearchEntry(Base):
    __tablename__ = "concept_search"
    __table_args__ = (
        Index(SEARCH_INDEX_NAME, "domain_id", "search_text_upper"),
    )

    concept_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    domain_id: Mapped[str] = mapped_column(String(20), nullable=False)
    search_text: Mapped[str] = mapped_column(Text, nullable=False)
    search_text_upper: Mapped[str] = mapped_column(Text, nullable=False)
    concept_name: Mapped[str] = mapped_column(String(255), nullable=False)
    concept_code: Mapped[str] = mapped_column(String(50), nullable=False)
    vocabulary_id: Mapped[str] = mapped_column(String(20), nullable=False)
    concept_class_id: Mapped[str] = mapped_column(String(20), nullable=False)
    standard_concept: Mapped[str | None] = mapped_column(String(1), nullable=True)


def project_search_entry(concept: Concept) -> ConceptSearchEntry:
    search_text = build_search_text(concept.concept_id, concept.concept_code, concept.concept_name)
    return ConceptSearchEntry(
        concept_id=concept.concept_id,
        domain_id=concept.domain_id,
        search_text=search_text,
        search_text_upper=search_text.upper(),
        concept_name=concept.concept_name,
        concept_code=concept.concept_code,
        vocabulary_id=concept.vocabulary_id,
        concept_class_id=concept.concept_class_id,
        standard_concept=concept.standard_concept,
    )
