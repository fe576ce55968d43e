"""SQLAlchemy table definitions for DİP.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (one record per normalized email)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(255), nullable=False),  # Trimmed, lowercased
    Column("first_name", String(255), nullable=False, server_default=""),
    Column("last_name", String(255), nullable=False, server_default=""),
    Column("avatar_url", Text, nullable=True),
    Column("active_user_type", String(50), nullable=False, server_default="user"),
    Column(
        "available_user_types",
        ARRAY(String(50)),
        nullable=False,
        server_default="{user}",
    ),
    Column("managed_user_id", String(255), nullable=True),  # Managed-auth user ID
    Column("is_verified", Boolean, nullable=False, server_default="true"),
    Column("language", String(10), nullable=False, server_default="tr"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    UniqueConstraint("email", name="uq_users_email"),
)

Index("idx_users_managed_user_id", users_table.c.managed_user_id)
