"""Alembic environment for DevEvent."""

from __future__ import annotations

import logging
from logging.config import fileConfig

from alembic import context
from flask import current_app, has_app_context
from sqlalchemy import engine_from_config, pool

from devevent.extensions import db

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

if config.config_file_name:
    fileConfig(config.config_file_name)
logger = logging.getLogger("alembic.env")

# Importing the model packages registers their tables on db.metadata.
from devevent.domains.bookings import models as booking_models  # noqa: E402,F401
from devevent.domains.events import models as event_models  # noqa: E402,F401

target_metadata = db.metadata


def get_url() -> str:
    # Under `flask db` the app is already pushed; plain `alembic` builds one.
    if has_app_context():
        return current_app.config["SQLALCHEMY_DATABASE_URI"]
    from devevent import create_app

    app = create_app(config.get_main_option("devevent_env", "development"))
    return app.config["SQLALCHEMY_DATABASE_URI"]


def run_migrations_offline() -> None:
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            logger.info("Running migrations against %s", connection.engine.url.render_as_string())
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
