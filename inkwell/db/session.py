# inkwell/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from inkwell.core.config import settings

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    SQLiteで外部キー制約(ON DELETE CASCADE)を有効にする
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(SQLALCHEMY_DATABASE_URL, pool_pre_ping=True)
enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(bind=engine, autoflush=False)
