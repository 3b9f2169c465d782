from __future__ import annotations

from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import create_engine, pool

from property_manager.infra.config import database_url
from property_manager.infra.db.models.base import Base
from property_manager.infra.db.models import PropertyRow  # noqa: F401  (registers the table)


config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _context_options() -> dict[str, Any]:
    # Detect NUMERIC precision and VARCHAR length changes
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "compare_server_default": True,
    }


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting (``alembic upgrade --sql``)."""
    context.configure(
        url=database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # Same DATABASE_URL as the API; no pooling for a one-shot run
    engine = create_engine(database_url(), poolclass=pool.NullPool)

    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_context_options())

            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
