"""Initial schema — life_progress_entries, life_progress_suggestions, missions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "life_progress_entries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("subject_id", UUID(as_uuid=True), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("satisfaction_score", sa.Integer, nullable=False),
        sa.Column("entry_date", sa.Date, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "subject_id", "category", "entry_date",
            name="uq_life_progress_entries_subject_category_date",
        ),
        sa.CheckConstraint(
            "satisfaction_score BETWEEN 1 AND 100",
            name="ck_life_progress_entries_score_range",
        ),
    )
    op.create_index(
        "ix_life_progress_entries_subject_date",
        "life_progress_entries", ["subject_id", "entry_date"],
    )

    op.create_table(
        "life_progress_suggestions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("subject_id", UUID(as_uuid=True), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("suggestion_text", sa.Text, nullable=False),
        sa.Column("suggestion_type", sa.String(20), nullable=False),
        sa.Column("priority", sa.Integer, nullable=False, server_default="0"),
        sa.Column("based_on_score", sa.Float, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("metadata", sa.JSON, nullable=False, server_default="{}"),
    )
    op.create_index(
        "ix_life_progress_suggestions_subject_active",
        "life_progress_suggestions", ["subject_id", "is_active", "expires_at"],
    )

    op.create_table(
        "missions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("subject_id", UUID(as_uuid=True), nullable=False),
        sa.Column("source_suggestion_id", UUID(as_uuid=True), nullable=True, unique=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("difficulty_level", sa.String(10), nullable=False, server_default="medium"),
        sa.Column("xp_reward", sa.Integer, nullable=False),
        sa.Column("is_suggestion", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("suggestion_reason", sa.Text, nullable=True),
        sa.Column("completion_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_missions_subject_id", "missions", ["subject_id"])


def downgrade() -> None:
    op.drop_index("ix_missions_subject_id", table_name="missions")
    op.drop_table("missions")
    op.drop_index(
        "ix_life_progress_suggestions_subject_active",
        table_name="life_progress_suggestions",
    )
    op.drop_table("life_progress_suggestions")
    op.drop_index(
        "ix_life_progress_entries_subject_date",
        table_name="life_progress_entries",
    )
    op.drop_table("life_progress_entries")
