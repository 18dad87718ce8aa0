"""SQLAlchemy model for the vocabulary ``concept`` table.

Rows are owned by the external vocabulary loader; this service only reads
them.
"""

from __future__ import annotations

import enum

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from concept_search.db.base import Base


class StandardConcept(str, enum.Enum):
    """Values of ``concept.standard_concept``; NULL means non-standard."""

    STANDARD = "S"
    CLASSIFICATION = "C"


class Concept(Base):
    __tablename__ = "concept"

    concept_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    concept_name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain_id: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    vocabulary_id: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    concept_class_id: Mapped[str] = mapped_column(String(20), nullable=False)
    standard_concept: Mapped[str | None] = mapped_column(String(1), nullable=True)
    concept_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
