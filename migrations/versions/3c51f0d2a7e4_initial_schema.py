"""initial_schema

Create the users table for DİP identity federation:
- one row per normalized email (UNIQUE constraint backs the sync upsert)
- available_user_types as a text array that only grows

Revision ID: 3c51f0d2a7e4
Revises:
Create Date: 2026-10-17 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c51f0d2a7e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=255), server_default="", nullable=False),
        sa.Column("last_name", sa.String(length=255), server_default="", nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "active_user_type", sa.String(length=50), server_default="user", nullable=False
        ),
        sa.Column(
            "available_user_types",
            postgresql.ARRAY(sa.String(length=50)),
            server_default="{user}",
            nullable=False,
        ),
        sa.Column("managed_user_id", sa.String(length=255), nullable=True),
        sa.Column("is_verified", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("language", sa.String(length=10), server_default="tr", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint("email = lower(btrim(email))", name="ck_users_email_normalized"),
    )
    op.create_index("idx_users_managed_user_id", "users", ["managed_user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_users_managed_user_id", table_name="users")
    op.drop_table("users")
