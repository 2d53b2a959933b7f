# inkwell/db/base.py
from typing import Generator
from sqlalchemy.orm import DeclarativeBase, Session

from inkwell.db.session import SessionLocal


class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    """リクエスト単位のDBセッション"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
