"""``alembic upgrade --sql`` produces a clean SQL script.

The script goes to stdout and log records go to stderr, so redirecting
stdout to a file yields SQL only.
"""

import json
import sys

from alembic import command
from alembic.config import Config
from tests.helpers.database import BASE_REVISION, PROJECT_ROOT, WALLET_REVISION

SQL_KEYWORDS = {"BEGIN", "COMMIT", "CREATE", "ALTER", "DROP", "UPDATE", "INSERT"}


def _statements(script: str) -> list[str]:
    lines = [
        line
        for line in script.splitlines()
        if line.strip() and not line.lstrip().startswith("--")
    ]
    return [chunk.strip() for chunk in "\n".join(lines).split(";") if chunk.strip()]


def _offline_upgrade(capsys) -> tuple[str, str]:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"), output_buffer=sys.stdout)
    cfg.set_main_option("sqlalchemy.url", "postgresql+asyncpg://u:p@db/wallets")
    command.upgrade(cfg, f"{BASE_REVISION}:{WALLET_REVISION}", sql=True)
    captured = capsys.readouterr()
    return captured.out, captured.err


class TestOfflineUpgrade:
    """Offline rendering of the wallet columns revision."""

    def test_stdout_contains_only_sql(self, restore_logging, capsys):
        out, _ = _offline_upgrade(capsys)

        statements = _statements(out)
        assert statements
        for statement in statements:
            assert statement.split()[0].upper() in SQL_KEYWORDS, statement

    def test_schema_steps_rendered_in_order(self, restore_logging, capsys):
        out, _ = _offline_upgrade(capsys)

        positions = [
            out.index("ALTER TABLE coinstats_accounts ADD COLUMN address VARCHAR"),
            out.index("ALTER TABLE coinstats_accounts ADD COLUMN blockchain VARCHAR"),
            out.index("CREATE UNIQUE INDEX index_coinstats_accounts_on_item_token_and_wallet"),
            out.index("DROP INDEX ix_coinstats_accounts_account_id"),
            out.index("UPDATE coinstats_accounts SET"),
        ]
        assert positions == sorted(positions)
        assert (
            "WHERE account_id IS NOT NULL AND address IS NOT NULL AND blockchain IS NOT NULL"
            in out
        )

    def test_backfill_update_rendered(self, restore_logging, capsys):
        out, _ = _offline_upgrade(capsys)

        update = next(s for s in _statements(out) if s.startswith("UPDATE coinstats_accounts"))
        assert "raw_payload ->> 'address'" in update
        assert "raw_payload ->> 'blockchain'" in update

    def test_step_logs_go_to_stderr_as_json(self, restore_logging, capsys):
        out, err = _offline_upgrade(capsys)

        events = [json.loads(line)["event"] for line in err.splitlines() if line.startswith("{")]
        assert any(e.startswith("Applying schema change") for e in events)
        assert "Applying schema change" not in out
