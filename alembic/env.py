"""
Alembic Migration Environment
===============================

What:  Runs Alembic migrations against the bookmarks database using the
       same async engine configuration as the application.
Who:   Called by `alembic upgrade head` / `alembic downgrade` / `alembic revision`.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from bookmarks_api.config import settings
from bookmarks_api.database import Base

# Alembic only autogenerates for models registered on Base.metadata
from bookmarks_api.models.bookmark import Bookmark  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Single source of truth: DATABASE_URL from the app settings, not alembic.ini
config.set_main_option("sqlalchemy.url", settings.database_url)


def _configure_kwargs() -> dict:
    # SQLite cannot ALTER most constraints in place; batch mode recreates tables
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": settings.is_sqlite,
    }


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting to the database."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, **_configure_kwargs())

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Connect with an async engine and run migrations through run_sync()."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
