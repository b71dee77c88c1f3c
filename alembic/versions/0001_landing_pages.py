"""Create doctor profile and AI landing page tables.

Revision ID: 0001_landing_pages
Revises:
Create Date: 2025-06-02 00:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_landing_pages"
down_revision = None
branch_labels = None
depends_on = None

_json = postgresql.JSONB().with_variant(sa.JSON(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "doctor_profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("first_name", sa.String(255)),
        sa.Column("last_name", sa.String(255)),
        sa.Column("specialty", sa.String(255)),
        sa.Column("clinic_name", sa.String(255)),
        sa.Column("location", sa.String(255)),
        sa.Column("phone", sa.String(64)),
        sa.Column("website", sa.String(2048)),
        sa.Column("avatar_url", sa.String(2048)),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_table(
        "ai_landing_pages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("doctor_id", sa.String(36), nullable=False),
        sa.Column("quiz_type", sa.String(16), nullable=False),
        sa.Column("content", _json, nullable=True),
        sa.Column("chatbot_colors", _json, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_ai_landing_pages_doctor_quiz",
        "ai_landing_pages",
        ["doctor_id", "quiz_type"],
    )


def downgrade() -> None:
    op.drop_index("ix_ai_landing_pages_doctor_quiz", table_name="ai_landing_pages")
    op.drop_table("ai_landing_pages")
    op.drop_table("doctor_profiles")
