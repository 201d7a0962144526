"""Initial schema: prompts, ai_voices, video_records

Revision ID: 0001
Revises: None
Create Date: 2026-10-17 09:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- prompts ---
    op.create_table(
        "prompts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("prompt", sa.Text, nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("theme", sa.String(255), nullable=True),
        sa.Column("audience", sa.String(255), nullable=True),
        sa.Column("additional_context", sa.Text, nullable=True),
        sa.Column("POV", sa.String(100), nullable=True),
        sa.Column("format", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- ai_voices ---
    op.create_table(
        "ai_voices",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("voice_id", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("provider", "voice_id", name="uq_ai_voices_provider_voice"),
    )
    op.create_index("ix_ai_voices_provider", "ai_voices", ["provider"])

    # --- video_records ---
    op.create_table(
        "video_records",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("provider", sa.String(50), nullable=True),
        sa.Column("model", sa.String(100), nullable=True),
        sa.Column("prompt", sa.Text, nullable=True),
        sa.Column("origin_url", sa.String(2048), nullable=True),
        sa.Column("video_url", sa.String(2048), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False, server_default="video/mp4"),
        sa.Column("size", sa.BigInteger, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_video_records_user_id", "video_records", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_video_records_user_id", table_name="video_records")
    op.drop_table("video_records")
    op.drop_index("ix_ai_voices_provider", table_name="ai_voices")
    op.drop_table("ai_voices")
    op.drop_table("prompts")
