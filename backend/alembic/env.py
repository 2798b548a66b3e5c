from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool

from settracker.db import Base
from settracker.settings import get_settings
from settracker import models  # noqa: F401  # ensures SetRow is imported

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

def get_url():
    url = get_settings().database_url
    if not url:
        raise RuntimeError("DATABASE_URL (or DB_HOST) is not set")
    return url

target_metadata = Base.metadata

def run_migrations_offline():
    context.configure(url=get_url(), target_metadata=target_metadata, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config({"sqlalchemy.url": get_url()}, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
