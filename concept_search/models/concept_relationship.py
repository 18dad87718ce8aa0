from __future__ import annotations

from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from concept_search.db.base import Base

MAPS_TO = "Maps to"


class ConceptRelationship(Base):
    __tablename__ = "concept_relationship"
    __table_args__ = (
        Index("ix_concept_relationship_source_kind", "concept_id_1", "relationship_id"),
    )

    concept_id_1: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    concept_id_2: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    relationship_id: Mapped[str] = mapped_column(String(20), primary_key=True)
