"""Shared constants used across models, migrations and scripts."""

COINSTATS_ITEMS_TABLE = "coinstats_items"
COINSTATS_ACCOUNTS_TABLE = "coinstats_accounts"

# Single-column index that predates wallet tracking
ACCOUNT_ID_INDEX = "ix_coinstats_accounts_account_id"

# One linked account per (item, token, wallet address, chain)
WALLET_INDEX = "index_coinstats_accounts_on_item_token_and_wallet"
WALLET_INDEX_COLUMNS = ("coinstats_item_id", "account_id", "address", "blockchain")
WALLET_INDEX_FILTER_COLUMNS = ("account_id", "address", "blockchain")

# raw_payload keys copied into dedicated columns by the wallet backfill
WALLET_PAYLOAD_KEYS = ("address", "blockchain")
