"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "flashcard_sets",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("topic", sa.String(length=255), nullable=False),
        sa.Column("flashcards", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_flashcard_sets_user_id", "flashcard_sets", ["user_id"])
    op.create_index("ix_flashcard_sets_created_at", "flashcard_sets", ["created_at"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("auth_id", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("picture", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_users_auth_id", "users", ["auth_id"])

    op.create_table(
        "users_by_auth_id",
        sa.Column("auth_id", sa.String(length=255), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
    )
    op.create_index("ix_users_by_auth_id_user_id", "users_by_auth_id", ["user_id"])

    op.create_table(
        "sessions",
        sa.Column("token", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("last_accessed_at", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])

    op.create_table(
        "rate_limit_attempts",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_rate_limit_attempts_timestamp", "rate_limit_attempts", ["timestamp"])
    op.create_index("ix_rate_limit_attempts_user_timestamp", "rate_limit_attempts", ["user_id", "timestamp"])

    op.create_table(
        "rate_limit_configs",
        sa.Column("user_id", sa.String(length=64), primary_key=True),
        sa.Column("custom_limit", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("rate_limit_configs")
    op.drop_index("ix_rate_limit_attempts_user_timestamp", table_name="rate_limit_attempts")
    op.drop_index("ix_rate_limit_attempts_timestamp", table_name="rate_limit_attempts")
    op.drop_table("rate_limit_attempts")
    op.drop_index("ix_sessions_user_id", table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("ix_users_by_auth_id_user_id", table_name="users_by_auth_id")
    op.drop_table("users_by_auth_id")
    op.drop_index("ix_users_auth_id", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_flashcard_sets_created_at", table_name="flashcard_sets")
    op.drop_index("ix_flashcard_sets_user_id", table_name="flashcard_sets")
    op.drop_table("flashcard_sets")
