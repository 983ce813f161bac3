"""Alembic environment for wallet-links.

Connection precedence:
1. a Connection handed over in ``config.attributes["connection"]`` (tests,
   programmatic upgrades);
2. ``sqlalchemy.url`` from alembic.ini or set on the Config object;
3. ``DATABASE_URL`` through :func:`wallet_links.config.get_settings`.

Async driver URLs (asyncpg) are run through an AsyncEngine and
``Connection.run_sync``; anything else uses a plain Engine.
"""

import asyncio
import logging

from sqlalchemy import engine_from_config, make_url, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from wallet_links.config import get_settings
from wallet_links.models import Base
from wallet_links.utils.logging import setup_logging

config = context.config
settings = get_settings()

if config.attributes.get("configure_logger", True):
    setup_logging(settings.log_level, settings.log_format)

logger = logging.getLogger("alembic.env")

if not config.get_main_option("sqlalchemy.url"):
    # configparser treats % as interpolation
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations against a live database."""
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
        return

    url = make_url(config.get_main_option("sqlalchemy.url"))
    logger.info("Running migrations against %s", url.render_as_string(hide_password=True))

    if url.get_dialect().is_async:
        asyncio.run(run_async_migrations())
        return

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        do_run_migrations(connection)
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
