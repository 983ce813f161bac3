"""add_address_and_blockchain_to_coinstats_accounts

Revision ID: b7e4f1a9c3d2
Revises: a1c0e7d2b4f9
Create Date: 2026-01-15 12:00:00.000000

Tracks the wallet each linked CoinStats account lives in:
- coinstats_accounts.address and coinstats_accounts.blockchain (nullable)
- unique partial index on (coinstats_item_id, account_id, address, blockchain),
  replacing the unique index on account_id
- backfill of both columns from raw_payload for existing rows (upgrade only)
"""

from typing import Sequence, Union

from alembic import context, op
from wallet_links.migration.backfill import backfill_wallet_columns, build_backfill_statement
from wallet_links.migration.wallet_columns import WALLET_COLUMNS_CHANGE

# revision identifiers, used by Alembic.
revision: str = "b7e4f1a9c3d2"
down_revision: Union[str, None] = "a1c0e7d2b4f9"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1-4. Columns, new composite index, drop of the account_id index
    WALLET_COLUMNS_CHANGE.upgrade(op)

    # 5. Backfill address/blockchain from raw_payload
    if context.is_offline_mode():
        op.execute(build_backfill_statement())
    else:
        backfill_wallet_columns(op.get_bind())


def downgrade() -> None:
    # Backfilled values go away with the columns; there is nothing else to undo
    WALLET_COLUMNS_CHANGE.downgrade(op)
