"""Unit tests for the wallet backfill statement and runner."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import make_url
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DBAPIError

from wallet_links.migration.backfill import (
    backfill_wallet_columns,
    build_backfill_statement,
    render_backfill_sql,
)
from wallet_links.migration.errors import BackfillError


def _render(statement, dialect) -> str:
    return str(statement.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))


class TestPostgresStatement:
    """Tests for the statement as rendered on PostgreSQL."""

    @pytest.fixture()
    def sql(self):
        return _render(build_backfill_statement(), postgresql.dialect())

    def test_updates_coinstats_accounts(self, sql):
        assert sql.startswith("UPDATE coinstats_accounts SET")

    def test_extracts_keys_as_text(self, sql):
        assignments = sql.split("WHERE", 1)[0]
        assert "raw_payload ->> 'address'" in assignments
        assert "raw_payload ->> 'blockchain'" in assignments

    def test_requires_payload_and_both_keys(self, sql):
        where = sql.split("WHERE", 1)[1]
        assert "coinstats_accounts.raw_payload IS NOT NULL" in where
        assert "raw_payload ->> 'address'" in where
        assert "raw_payload ->> 'blockchain'" in where
        assert where.count("IS NOT NULL") == 3

    def test_overwrites_by_default(self, sql):
        where = sql.split("WHERE", 1)[1]
        assert "coinstats_accounts.address IS NULL" not in where

    def test_only_missing_guards_existing_values(self):
        sql = _render(build_backfill_statement(overwrite=False), postgresql.dialect())
        where = sql.split("WHERE", 1)[1]
        assert "coinstats_accounts.address IS NULL" in where
        assert "coinstats_accounts.blockchain IS NULL" in where


class TestSqliteStatement:
    def test_uses_json_extract(self):
        sql = _render(build_backfill_statement(), sqlite.dialect())
        assert "JSON_EXTRACT(coinstats_accounts.raw_payload" in sql


class TestBackfillWalletColumns:
    """Tests for running the backfill against a connection."""

    def test_returns_rowcount(self):
        connection = MagicMock()
        connection.execute.return_value.rowcount = 3

        assert backfill_wallet_columns(connection) == 3
        connection.execute.assert_called_once()

    def test_passes_overwrite_flag(self):
        connection = MagicMock()
        connection.execute.return_value.rowcount = 0

        backfill_wallet_columns(connection, overwrite=False)

        statement = connection.execute.call_args.args[0]
        assert "address IS NULL" in _render(statement, postgresql.dialect())

    def test_database_error_raises_backfill_error(self):
        connection = MagicMock()
        connection.execute.side_effect = DBAPIError(
            "UPDATE coinstats_accounts", {}, Exception("cannot extract elements from a scalar")
        )

        with pytest.raises(BackfillError) as exc_info:
            backfill_wallet_columns(connection)

        assert exc_info.value.table == "coinstats_accounts"
        assert isinstance(exc_info.value.__cause__, DBAPIError)


class TestRenderBackfillSql:
    """Tests for dialect-specific rendering used by ``--dry-run``."""

    def test_renders_for_configured_sqlite_url(self):
        dialect = make_url("sqlite:///wallet_links.db").get_dialect()()
        sql = render_backfill_sql(dialect)

        assert "JSON_EXTRACT(coinstats_accounts.raw_payload" in sql
        assert "->>" not in sql

    def test_renders_for_configured_postgres_url(self):
        dialect = make_url("postgresql+asyncpg://u:p@db/wallets").get_dialect()()
        sql = render_backfill_sql(dialect, overwrite=False)

        assert "raw_payload ->> 'address'" in sql
        assert "coinstats_accounts.address IS NULL" in sql
