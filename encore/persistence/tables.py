"""SQLAlchemy table definitions for the ranking engine.

These table definitions are used for Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Float,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ITEMS TABLE (shows, written by the surrounding app)
# ============================================================================
items_table = Table(
    "items",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("owner_id", UUID, nullable=False),
    Column("occurred_on", Date, nullable=False),
    Column("category", String(50), nullable=True),  # 'show', 'festival', ...
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_items_owner_id", items_table.c.owner_id)
Index("idx_items_owner_occurred_on", items_table.c.owner_id, items_table.c.occurred_on)

# ============================================================================
# RATINGS TABLE (materialized Elo state, rebuildable from comparisons)
# ============================================================================
ratings_table = Table(
    "ratings",
    metadata,
    Column("owner_id", UUID, nullable=False),
    Column(
        "item_id", UUID, ForeignKey("items.id", ondelete="CASCADE"), nullable=False
    ),
    Column("elo_score", Float, nullable=False, server_default="1200"),
    Column("comparisons_count", Integer, nullable=False, server_default="0"),
    Column("pending_recompute", Boolean, nullable=False, server_default="false"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("owner_id", "item_id", name="pk_ratings"),
    CheckConstraint("comparisons_count >= 0", name="comparisons_count_non_negative"),
)

Index("idx_ratings_owner_elo", ratings_table.c.owner_id, ratings_table.c.elo_score.desc())

# ============================================================================
# COMPARISONS TABLE (append-only ledger)
# ============================================================================
comparisons_table = Table(
    "comparisons",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("owner_id", UUID, nullable=False),
    Column(
        "item_low_id", UUID, ForeignKey("items.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "item_high_id", UUID, ForeignKey("items.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "winner_id", UUID, ForeignKey("items.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    # Insertion order; breaks ties between equal created_at values
    Column("seq", BigInteger, Identity(always=True), nullable=False, unique=True),
    CheckConstraint(
        "item_low_id::text < item_high_id::text", name="comparison_pair_normalized"
    ),
    CheckConstraint(
        "winner_id = item_low_id OR winner_id = item_high_id",
        name="comparison_winner_in_pair",
    ),
)

Index(
    "idx_comparisons_owner_created_at",
    comparisons_table.c.owner_id,
    comparisons_table.c.created_at,
    comparisons_table.c.seq,
)
Index(
    "idx_comparisons_pair",
    comparisons_table.c.owner_id,
    comparisons_table.c.item_low_id,
    comparisons_table.c.item_high_id,
)
Index("idx_comparisons_item_high_id", comparisons_table.c.item_high_id)
