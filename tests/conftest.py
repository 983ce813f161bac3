"""Shared test fixtures for wallet-links."""

import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
import sqlalchemy as sa
import structlog
from sqlalchemy.engine import Engine

from tests.helpers.database import BASE_REVISION, upgrade


@pytest.fixture()
def mock_op():
    """Stand-in for ``alembic.op`` that records every call."""
    return MagicMock()


@pytest.fixture()
def sqlite_engine(tmp_path) -> Iterator[Engine]:
    """File-backed SQLite engine, fresh per test."""
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'wallet_links.db'}")
    yield engine
    engine.dispose()


@pytest.fixture()
def base_schema(sqlite_engine) -> Engine:
    """SQLite database migrated to the schema that predates wallet columns."""
    with sqlite_engine.begin() as conn:
        upgrade(conn, BASE_REVISION)
    return sqlite_engine


@pytest.fixture()
def restore_logging():
    """Undo ``setup_logging`` changes to the root logger and structlog."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
