# migrations/env.py
from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

# DB接続先のURL読み込み
from inkwell.db.session import SQLALCHEMY_DATABASE_URL, enable_sqlite_foreign_keys
from inkwell.db.base import Base
from inkwell import models  # noqa: F401  メタデータにテーブルを登録する

config = context.config
if config.attributes.get("configure_logger", True) and config.config_file_name:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata

def run_migrations_offline():
    context.configure(
        url=SQLALCHEMY_DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = create_engine(SQLALCHEMY_DATABASE_URL, poolclass=pool.NullPool)
    enable_sqlite_foreign_keys(connectable)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
