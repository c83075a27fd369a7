# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets up environment variables before the application modules are imported
# and provides a throwaway SQLite database per test.
# =============================================================================

import os

os.environ.setdefault("DB_NAME", "starter_test")
os.environ.setdefault("DB_USER", "starter")
os.environ.setdefault("DB_PASSWORD", "starter")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("ENVIRONMENT", "test")

import logfire
import pytest
from fastapi.testclient import TestClient

from starter.config import load_settings
from starter.database import Database
from starter.dependencies import build_deps
from starter.main import create_app
from starter.routers import build_router

logfire.configure(send_to_logfire=False, console=False)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a SQLite file inside the test's tmp dir."""
    return load_settings(DB_DIALECT="sqlite", DB_NAME=str(tmp_path / "test.db"))


@pytest.fixture
def database(settings):
    """A Database with the schema created."""
    db = Database(settings.database_url)
    db.sync()
    yield db
    db.dispose()


@pytest.fixture
def deps(database):
    return build_deps(database)


@pytest.fixture
def app(deps):
    return create_app(build_router(deps))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_user():
    return {"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com"}
