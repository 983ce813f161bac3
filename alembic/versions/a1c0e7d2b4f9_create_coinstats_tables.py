"""create_coinstats_tables

Revision ID: a1c0e7d2b4f9
Revises:
Create Date: 2026-01-08 09:00:00.000000

Creates coinstats_items and coinstats_accounts as they existed before wallet
tracking: linked accounts are unique on account_id alone.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1c0e7d2b4f9"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "coinstats_items",
        sa.Column("id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "coinstats_accounts",
        sa.Column("id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("coinstats_item_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("account_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("currency", sa.String(length=10), nullable=True),
        sa.Column(
            "raw_payload",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ["coinstats_item_id"], ["coinstats_items.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_coinstats_accounts_coinstats_item_id", "coinstats_accounts", ["coinstats_item_id"]
    )
    op.create_index(
        "ix_coinstats_accounts_account_id", "coinstats_accounts", ["account_id"], unique=True
    )


def downgrade() -> None:
    op.drop_index("ix_coinstats_accounts_account_id", table_name="coinstats_accounts")
    op.drop_index("ix_coinstats_accounts_coinstats_item_id", table_name="coinstats_accounts")
    op.drop_table("coinstats_accounts")
    op.drop_table("coinstats_items")
