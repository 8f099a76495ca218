"""Alembic environment for the chapterhub schema.

Migrations run against ``chapterhub.database.engine`` so they hit the same
``DATABASE_URL`` (and SQLite connect args) as the API. Run from ``backend/``;
``prepend_sys_path`` in alembic.ini makes ``chapterhub`` importable there.
"""
from logging.config import fileConfig

from alembic import context

from chapterhub.config import settings
from chapterhub.database import Base, engine

# Register every table on Base.metadata for autogenerate
from chapterhub.models import event, registration, user  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    # JSON rosters and String widths matter here; let autogenerate see type changes
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


if context.is_offline_mode():
    _configure(url=settings.DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()
else:
    with engine.connect() as connection:
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()
