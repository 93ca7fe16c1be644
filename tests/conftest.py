"""
Shared fixtures: an in-memory database per test, an API client wired to it,
and bearer tokens for an admin and a regular user.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from catalog.api.dependencies import get_db
from catalog.api.main import app
from catalog.api.security import create_access_token
from catalog.database import crud
from catalog.database.connection import DatabaseManager
from catalog.database.models import ROLE_ADMIN, ROLE_USER


@pytest.fixture
def db_manager():
    """Fresh in-memory SQLite database with all tables."""
    manager = DatabaseManager(db_path=":memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """A database session for direct CRUD calls."""
    session = db_manager.new_session()
    yield session
    session.close()


@pytest.fixture
def client(db_manager):
    """TestClient whose requests use the in-memory database."""
    def override_get_db():
        with db_manager.session_scope() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db_manager):
    with db_manager.session_scope() as session:
        user = crud.create_user(session, name="Ada Admin", email="admin@example.com", role=ROLE_ADMIN)
        return user.user_id


@pytest.fixture
def regular_user(db_manager):
    with db_manager.session_scope() as session:
        user = crud.create_user(session, name="Reggie Viewer", email="viewer@example.com", role=ROLE_USER)
        return user.user_id


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {create_access_token(regular_user)}"}


def make_movie(**overrides):
    """Valid movie fields for crud.create_movie, with overrides."""
    fields = {
        "title": "Inception",
        "description": "A thief who steals secrets through dream-sharing technology.",
        "release_date": date(2010, 7, 16),
        "duration": 148,
        "rating": 8.8,
        "genre": ["Sci-Fi"],
        "director": "Christopher Nolan",
        "cast": ["Leonardo DiCaprio"],
    }
    fields.update(overrides)
    return fields


def movie_payload(**overrides):
    """Valid JSON body for POST /api/movies, with overrides."""
    payload = make_movie(**overrides)
    if isinstance(payload.get("release_date"), date):
        payload["release_date"] = payload["release_date"].isoformat()
    return payload
