"""Re-run the wallet backfill outside of a migration.

Copies ``address`` and ``blockchain`` out of ``raw_payload`` for linked
CoinStats accounts. Useful after importing rows that predate the wallet
columns into an already-migrated database.
"""
import argparse
import asyncio
import sys
from pathlib import Path

from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import create_async_engine

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wallet_links.config import get_settings
from wallet_links.migration.backfill import backfill_wallet_columns, render_backfill_sql
from wallet_links.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def run_backfill(database_url: str, overwrite: bool) -> int:
    """Run the backfill in its own transaction and return the updated row count."""
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            return await conn.run_sync(backfill_wallet_columns, overwrite)
    finally:
        await engine.dispose()


async def main() -> None:
    parser = argparse.ArgumentParser(description="Backfill wallet columns from raw_payload")
    parser.add_argument(
        "--only-missing",
        action="store_true",
        help="Skip rows that already have address or blockchain set",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the UPDATE statement instead of running it",
    )

    args = parser.parse_args()
    overwrite = not args.only_missing

    settings = get_settings()

    if args.dry_run:
        dialect = make_url(settings.database_url).get_dialect()()
        print(render_backfill_sql(dialect, overwrite=overwrite))
        return

    setup_logging(settings.log_level, settings.log_format)

    updated = await run_backfill(settings.database_url, overwrite)
    logger.info("backfill_complete", updated=updated, overwrite=overwrite)


if __name__ == "__main__":
    asyncio.run(main())
