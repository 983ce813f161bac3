"""One-way backfill of wallet columns from ``raw_payload``.

The backfill has no inverse: once application code starts writing
``address`` and ``blockchain`` directly, backfilled values cannot be told
apart from ones written later. It is therefore kept out of
:class:`~wallet_links.migration.operations.SchemaChange` and exposed as a
plain function that revisions and maintenance scripts both call.
"""

import logging

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Connection, Dialect
from sqlalchemy.exc import SQLAlchemyError

from wallet_links.constants import COINSTATS_ACCOUNTS_TABLE, WALLET_PAYLOAD_KEYS
from wallet_links.migration.errors import BackfillError

logger = logging.getLogger(__name__)

# Lightweight table so the backfill does not depend on the current ORM model
coinstats_accounts = sa.table(
    COINSTATS_ACCOUNTS_TABLE,
    sa.column("address", sa.String),
    sa.column("blockchain", sa.String),
    sa.column("raw_payload", sa.JSON().with_variant(postgresql.JSONB(), "postgresql")),
)


def build_backfill_statement(overwrite: bool = True) -> sa.Update:
    """Build the bulk UPDATE that copies wallet keys out of ``raw_payload``.

    Only rows whose payload carries non-null values for every wallet key are
    updated; a payload with just one of the keys leaves the row untouched.

    Args:
        overwrite: When False, rows that already have ``address`` or
            ``blockchain`` set are skipped.
    """
    table = coinstats_accounts
    extracted = {key: table.c.raw_payload[key].as_string() for key in WALLET_PAYLOAD_KEYS}

    conditions = [table.c.raw_payload.is_not(None)]
    conditions.extend(value.is_not(None) for value in extracted.values())
    if not overwrite:
        conditions.extend(table.c[key].is_(None) for key in WALLET_PAYLOAD_KEYS)

    return sa.update(table).where(*conditions).values(**extracted)


def render_backfill_sql(dialect: Dialect, overwrite: bool = True) -> str:
    """Render the backfill as literal SQL for ``dialect``."""
    statement = build_backfill_statement(overwrite=overwrite)
    return str(statement.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))


def backfill_wallet_columns(connection: Connection, overwrite: bool = True) -> int:
    """Run the wallet backfill and return the number of rows updated.

    Raises:
        BackfillError: If the database rejects the statement.
    """
    statement = build_backfill_statement(overwrite=overwrite)
    try:
        result = connection.execute(statement)
    except SQLAlchemyError as exc:
        logger.error("Wallet backfill failed on %s: %s", COINSTATS_ACCOUNTS_TABLE, exc)
        raise BackfillError(COINSTATS_ACCOUNTS_TABLE) from exc

    updated = result.rowcount
    logger.info(
        "Backfilled wallet columns for %d %s rows (overwrite=%s)",
        updated,
        COINSTATS_ACCOUNTS_TABLE,
        overwrite,
    )
    return updated
