import os

# アプリのimport前にテスト用の設定を入れる
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("AUTO_MIGRATE", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

from uuid import uuid4

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inkwell import models  # noqa: F401
from inkwell.core.config import settings
from inkwell.db.base import Base, get_db
from inkwell.db.session import enable_sqlite_foreign_keys
from inkwell.main import app
from inkwell.schemas.principal import Principal


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def author():
    return Principal(id=uuid4(), email="alice@example.com", display_name="Alice")


@pytest.fixture
def other_user():
    return Principal(id=uuid4(), email="bob@example.com", display_name="Bob")


def issue_token(user: Principal) -> str:
    """IdPが発行するアクセストークンと同じ形式のJWTを作る"""
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "user_metadata": {"name": user.display_name},
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def auth_headers():
    def _headers(user: Principal) -> dict:
        return {"Authorization": f"Bearer {issue_token(user)}"}
    return _headers


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
