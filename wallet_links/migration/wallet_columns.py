"""Wallet address and chain tracking for linked CoinStats accounts.

A CoinStats item can expose the same token account on several wallets and
chains, so ``account_id`` alone no longer identifies a row. The change adds
``address`` and ``blockchain`` columns and moves uniqueness to
``(coinstats_item_id, account_id, address, blockchain)``. Rows where any of
``account_id``, ``address`` or ``blockchain`` is null are left out of the
index, since null marks an account that is not linked yet.
"""

import sqlalchemy as sa

from wallet_links.constants import (
    ACCOUNT_ID_INDEX,
    COINSTATS_ACCOUNTS_TABLE,
    WALLET_INDEX,
    WALLET_INDEX_COLUMNS,
    WALLET_INDEX_FILTER_COLUMNS,
)
from wallet_links.migration.operations import AddColumn, CreateIndex, DropIndex, SchemaChange
from wallet_links.migration.predicates import NotNullPredicate

WALLET_INDEX_PREDICATE = NotNullPredicate(*WALLET_INDEX_FILTER_COLUMNS)

WALLET_COLUMNS_CHANGE = SchemaChange(
    name="add_address_and_blockchain_to_coinstats_accounts",
    steps=(
        AddColumn(COINSTATS_ACCOUNTS_TABLE, "address", sa.String()),
        AddColumn(COINSTATS_ACCOUNTS_TABLE, "blockchain", sa.String()),
        CreateIndex(
            WALLET_INDEX,
            COINSTATS_ACCOUNTS_TABLE,
            WALLET_INDEX_COLUMNS,
            unique=True,
            where=WALLET_INDEX_PREDICATE,
        ),
        DropIndex(
            ACCOUNT_ID_INDEX,
            COINSTATS_ACCOUNTS_TABLE,
            ("account_id",),
            unique=True,
        ),
    ),
)
