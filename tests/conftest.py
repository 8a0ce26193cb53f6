# tests/conftest.py
import asyncio
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool

from online_library.database import db as db_module
from online_library.database.db import build_engine, init_models
from online_library.database.db_depends import get_db
from online_library.main import app
from online_library.models import Author, Book, Genre, User
from online_library.utils.jwt import create_access_token


def run(coro):
    return asyncio.run(coro)


# --- Test Database Setup ---
# A fresh SQLite file per test; NullPool because every asyncio.run()
# and every TestClient request gets its own event loop
@pytest.fixture
def db_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    run(init_models(engine))
    yield engine
    run(engine.dispose())


@pytest.fixture
def session_maker(db_engine, monkeypatch):
    maker = async_sessionmaker(db_engine, expire_on_commit=False)
    # the admin CLI opens sessions through the module attribute
    monkeypatch.setattr(db_module, "async_session_maker", maker)
    return maker


@pytest.fixture
def client(session_maker):
    async def _get_test_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def db_run(session_maker):
    """Run `fn(session)` in a fresh session and return its result."""

    def _run(fn):
        async def _inner():
            async with session_maker() as session:
                return await fn(session)

        return run(_inner())

    return _run


@pytest.fixture
def make_user(db_run):
    def _make(email="reader@example.com", role="client"):
        async def _create(session):
            user = User(email=email, password_hash="not-a-real-hash", role=role)
            session.add(user)
            await session.commit()
            return user.id

        return db_run(_create)

    return _make


@pytest.fixture
def make_book(db_run):
    def _make(title="Dune", authors=(), genres=()):
        async def _create(session):
            book = Book(
                title=title,
                authors=[Author(name=name) for name in authors],
                genres=[Genre(name=name) for name in genres],
            )
            session.add(book)
            await session.commit()
            return book.id

        return db_run(_create)

    return _make


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(make_user):
    user_id = make_user("admin@example.com", role="admin")
    return bearer(create_access_token(user_id, role="admin"))


@pytest.fixture
def client_user(make_user):
    user_id = make_user("client@example.com", role="client")
    return user_id, bearer(create_access_token(user_id, role="client"))


@pytest.fixture
def auth_headers():
    """Build an Authorization header for any subject/role."""

    def _headers(subject, role=None, **kwargs):
        return bearer(create_access_token(subject, role=role, **kwargs))

    return _headers
