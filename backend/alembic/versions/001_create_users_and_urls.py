"""Create users and urls tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: accounts and the URL records they own.
How:   PostgreSQL UUID keys generated server-side when the application does
       not supply one; (user_id, url) unique so a user cannot count the same
       URL twice even under concurrent requests.

Rollback: downgrade() drops both tables (destructive, all data is lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(320), nullable=False, comment="Login email, lowercased"),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(60), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "urls",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("domain", sa.String(255), nullable=False, comment="Host component of url"),
        sa.Column("word_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("favorite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "url", name="uq_urls_user_url"),
        sa.CheckConstraint("word_count >= 0", name="ck_urls_word_count_non_negative"),
    )

    # Serves WHERE user_id = :u AND domain = :d ORDER BY url
    op.create_index("idx_urls_user_domain_url", "urls", ["user_id", "domain", "url"])


def downgrade() -> None:
    op.drop_index("idx_urls_user_domain_url", table_name="urls")
    op.drop_table("urls")
    op.drop_table("users")
