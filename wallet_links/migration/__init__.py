"""Schema change building blocks and the wallet column migration."""
from wallet_links.migration.backfill import (
    backfill_wallet_columns,
    build_backfill_statement,
    render_backfill_sql,
)
from wallet_links.migration.errors import (
    BackfillError,
    ConstraintViolation,
    MigrationError,
    MigrationStepError,
)
from wallet_links.migration.operations import AddColumn, CreateIndex, DropIndex, SchemaChange
from wallet_links.migration.predicates import NotNullPredicate
from wallet_links.migration.wallet_columns import WALLET_COLUMNS_CHANGE, WALLET_INDEX_PREDICATE

__all__ = [
    # Operations
    "AddColumn",
    "CreateIndex",
    "DropIndex",
    "SchemaChange",
    "NotNullPredicate",
    # Wallet columns
    "WALLET_COLUMNS_CHANGE",
    "WALLET_INDEX_PREDICATE",
    "backfill_wallet_columns",
    "build_backfill_statement",
    "render_backfill_sql",
    # Errors
    "MigrationError",
    "MigrationStepError",
    "ConstraintViolation",
    "BackfillError",
]
