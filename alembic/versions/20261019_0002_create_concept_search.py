"""Create the concept_search projection and its search indexes.

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19

The table is left empty; it is populated and refreshed by the vocabulary
loader.  On PostgreSQL a pg_trgm GIN index lets the unanchored
``search_text_upper LIKE '%...%'`` avoid a sequential scan.
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "concept_search",
        sa.Column("concept_id", sa.BigInteger(), primary_key=True),
        sa.Column("domain_id", sa.String(20), nullable=False),
        sa.Column("search_text", sa.Text(), nullable=False),
        sa.Column("search_text_upper", sa.Text(), nullable=False),
        sa.Column("concept_name", sa.String(255), nullable=False),
        sa.Column("concept_code", sa.String(50), nullable=False),
        sa.Column("vocabulary_id", sa.String(20), nullable=False),
        sa.Column("concept_class_id", sa.String(20), nullable=False),
        sa.Column("standard_concept", sa.String(1), nullable=True),
    )
    op.create_index(
        "ix_concept_search_domain_upper",
        "concept_search",
        ["domain_id", "search_text_upper"],
        unique=False,
    )

    bind = op.get_bind()
    if bind.dialect.name != "postgresql":
        return

    op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")

    op.create_index(
        "ix_concept_search_upper_trgm",
        "concept_search",
        ["search_text_upper"],
        unique=False,
        postgresql_using="gin",
        postgresql_ops={"search_text_upper": "gin_trgm_ops"},
    )


def downgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.drop_index("ix_concept_search_upper_trgm", table_name="concept_search")

    op.drop_index("ix_concept_search_domain_upper", table_name="concept_search")
    op.drop_table("concept_search")
