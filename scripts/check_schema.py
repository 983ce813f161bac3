"""Print the columns and indexes of coinstats_accounts."""
import asyncio
import sys
from pathlib import Path

from sqlalchemy.ext.asyncio import create_async_engine

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wallet_links.config import get_settings
from wallet_links.constants import ACCOUNT_ID_INDEX, COINSTATS_ACCOUNTS_TABLE, WALLET_INDEX
from wallet_links.migration.inspection import TableState, describe_table


def render(state: TableState) -> str:
    lines = [f"Table {state.name}", "  Columns:"]
    for name, nullable in state.columns.items():
        lines.append(f"    {name} {'NULL' if nullable else 'NOT NULL'}")
    lines.append("  Indexes:")
    for name, index in sorted(state.indexes.items()):
        unique = "UNIQUE " if index.unique else ""
        lines.append(f"    {unique}{name} ({', '.join(index.columns)})")

    migrated = (
        state.has_column("address")
        and state.has_column("blockchain")
        and state.has_index(WALLET_INDEX)
        and not state.has_index(ACCOUNT_ID_INDEX)
    )
    lines.append(f"  Wallet columns migration applied: {'yes' if migrated else 'no'}")
    return "\n".join(lines)


async def main() -> None:
    settings = get_settings()
    engine = create_async_engine(settings.database_url)

    async with engine.connect() as conn:
        state = await conn.run_sync(describe_table, COINSTATS_ACCOUNTS_TABLE)

    await engine.dispose()
    print(render(state))


if __name__ == "__main__":
    asyncio.run(main())
