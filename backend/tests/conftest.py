import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure backend/ is importable as the top-level "user_crud" package even when pytest runs from repo root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# Ensure the application runs in test/sqlite mode *before* importing any app modules
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from _helpers import make_settings  # noqa: E402
from user_crud.main import create_app  # noqa: E402


@pytest.fixture(scope="function")
def settings():
    return make_settings()


@pytest.fixture(scope="function")
def app(settings):
    # Fresh in-memory database per test
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()
    application.state.engine.dispose()


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def broken_session_factory(tmp_path):
    """Sessions bound to a SQLite file that can never be opened."""
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker

    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'users.db'}", future=True)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    yield factory
    engine.dispose()


@pytest.fixture(scope="function")
def alice(client):
    r = client.post("/users", json={"name": "Alice", "email": "alice@example.com", "age": 25})
    assert r.status_code == 201, r.text
    return r.json()
