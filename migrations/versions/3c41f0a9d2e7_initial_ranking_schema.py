"""initial_ranking_schema

Create the schema for pairwise show ranking:
- Items (shows logged by the surrounding app, read by the engine)
- Ratings (materialized Elo state per owner and show)
- Comparisons (append-only ledger of pairwise decisions)

Deleting an item cascades to its rating and every comparison it took part in.

Revision ID: 3c41f0a9d2e7
Revises:
Create Date: 2026-10-19 10:12:04.518233

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c41f0a9d2e7"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # ITEMS table
    # ========================================================================
    op.create_table(
        "items",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("occurred_on", sa.Date(), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),  # 'show', 'festival'
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_items_owner_id", "items", ["owner_id"])
    op.create_index(
        "idx_items_owner_occurred_on", "items", ["owner_id", "occurred_on"]
    )

    # ========================================================================
    # RATINGS table (rebuildable from comparisons)
    # ========================================================================
    op.create_table(
        "ratings",
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("item_id", sa.UUID(), nullable=False),
        sa.Column("elo_score", sa.Float(), nullable=False, server_default="1200"),
        sa.Column(
            "comparisons_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column(
            "pending_recompute", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["item_id"], ["items.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("owner_id", "item_id", name="pk_ratings"),
        sa.CheckConstraint(
            "comparisons_count >= 0", name="comparisons_count_non_negative"
        ),
    )
    op.create_index(
        "idx_ratings_owner_elo",
        "ratings",
        ["owner_id", sa.text("elo_score DESC")],
    )

    # ========================================================================
    # COMPARISONS table (append-only ledger)
    # ========================================================================
    op.create_table(
        "comparisons",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("item_low_id", sa.UUID(), nullable=False),
        sa.Column("item_high_id", sa.UUID(), nullable=False),
        sa.Column("winner_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("seq", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.ForeignKeyConstraint(["item_low_id"], ["items.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["item_high_id"], ["items.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["winner_id"], ["items.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("seq"),
        sa.CheckConstraint(
            "item_low_id::text < item_high_id::text",
            name="comparison_pair_normalized",
        ),
        sa.CheckConstraint(
            "winner_id = item_low_id OR winner_id = item_high_id",
            name="comparison_winner_in_pair",
        ),
    )
    op.create_index(
        "idx_comparisons_owner_created_at",
        "comparisons",
        ["owner_id", "created_at", "seq"],
    )
    op.create_index(
        "idx_comparisons_pair",
        "comparisons",
        ["owner_id", "item_low_id", "item_high_id"],
    )
    op.create_index("idx_comparisons_item_high_id", "comparisons", ["item_high_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("comparisons")
    op.drop_table("ratings")
    op.drop_table("items")
