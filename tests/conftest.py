"""
Shared fixtures.

The environment is configured before the application is imported so the
settings object, and the lazily created engine, point at an in-memory
SQLite database.
"""

import os

os.environ["ENV"] = "development"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-budget-tracker-tokens"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db import get_engine, get_sessionmaker, init_db
from app.main import app
from app.models import Base, Category, TransactionType
from app.services.query_cache import query_cache

USER_ID = "user_1"
OTHER_USER_ID = "user_2"


@pytest.fixture(autouse=True)
def database():
    init_db()
    yield
    Base.metadata.drop_all(bind=get_engine())
    query_cache.clear()


@pytest.fixture
def db(database):
    session = get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def _headers(user_id: str) -> dict:
    token = create_access_token(sub=user_id, email=f"{user_id}@example.com", name=user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return _headers(USER_ID)


@pytest.fixture
def other_headers():
    return _headers(OTHER_USER_ID)


@pytest.fixture
def make_category(db):
    def _make(name: str, type: TransactionType, icon: str = "💰", user_id: str = USER_ID) -> Category:
        category = Category(user_id=user_id, name=name, icon=icon, type=type)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make
