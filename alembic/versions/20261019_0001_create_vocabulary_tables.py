"""Create concept and concept_relationship tables.

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "concept",
        sa.Column("concept_id", sa.BigInteger(), primary_key=True),
        sa.Column("concept_name", sa.String(255), nullable=False),
        sa.Column("domain_id", sa.String(20), nullable=False),
        sa.Column("vocabulary_id", sa.String(20), nullable=False),
        sa.Column("concept_class_id", sa.String(20), nullable=False),
        sa.Column("standard_concept", sa.String(1), nullable=True),
        sa.Column("concept_code", sa.String(50), nullable=False),
    )
    op.create_index(op.f("ix_concept_domain_id"), "concept", ["domain_id"], unique=False)
    op.create_index(op.f("ix_concept_vocabulary_id"), "concept", ["vocabulary_id"], unique=False)
    op.create_index(op.f("ix_concept_concept_code"), "concept", ["concept_code"], unique=False)

    op.create_table(
        "concept_relationship",
        sa.Column("concept_id_1", sa.BigInteger(), primary_key=True),
        sa.Column("concept_id_2", sa.BigInteger(), primary_key=True),
        sa.Column("relationship_id", sa.String(20), primary_key=True),
    )
    op.create_index(
        "ix_concept_relationship_source_kind",
        "concept_relationship",
        ["concept_id_1", "relationship_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_concept_relationship_source_kind", table_name="concept_relationship")
    op.drop_table("concept_relationship")
    op.drop_index(op.f("ix_concept_concept_code"), table_name="concept")
    op.drop_index(op.f("ix_concept_vocabulary_id"), table_name="concept")
    op.drop_index(op.f("ix_concept_domain_id"), table_name="concept")
    op.drop_table("concept")
