# alembic/env.py
from __future__ import annotations

import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from adpc.core.config import get_settings
from adpc.core.logging import mask_url
from adpc.db.base import Base

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

# --- URL de conexión ---
# Preferimos la configuración de la app; fallback a sqlalchemy.url en alembic.ini
try:
    db_url = get_settings().db_url
except ValueError:
    db_url = config.get_main_option("sqlalchemy.url")

if not db_url:
    raise RuntimeError(
        "No se encontró URL de BD. Define DATABASE_URL en .env "
        "o sqlalchemy.url en alembic.ini"
    )

context.config.set_main_option("sqlalchemy.url", db_url)
target_metadata = Base.metadata

logger.info("sqlalchemy.url = %s", mask_url(db_url))


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    engine = create_engine(db_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
