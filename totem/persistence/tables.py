"""SQLAlchemy table definitions for the totem engine.

Content items are stored as whole JSONB documents with an integer version
used for optimistic concurrency control. They match the schema defined in
Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CONTENT ITEMS TABLE (question + answers + labels as one document)
# ============================================================================
content_items_table = Table(
    "content_items",
    metadata,
    Column("id", Text, primary_key=True),
    Column("document", JSONB, nullable=False),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# REFRESH QUOTAS TABLE
# ============================================================================
refresh_quotas_table = Table(
    "refresh_quotas",
    metadata,
    Column("user_id", Text, primary_key=True),
    Column("remaining", Integer, nullable=False),
    Column("reset_at", BigInteger, nullable=False),  # Epoch ms
    Column("tier", String(20), nullable=False, server_default="free"),
    CheckConstraint("remaining >= 0", name="ck_refresh_quotas_remaining"),
)
