"""Root conftest for all tests.

Environment is set before the application is imported so settings,
the default engine and the logger pick up test values.  Every test gets
its own in-memory SQLite database.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.core.security import create_access_token
from app.db.repositories.user import UserRepository
from app.db.session import get_db
from app.main import app
from app.models.user import User


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={ "check_same_thread": False }, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_test_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(engine):
    """Factory creating a user and returning ``(user, auth_headers)``.

    The password hash is a placeholder: these users authenticate with a
    token issued directly, never through the login endpoint.
    """

    def _make(email: str = "athlete@fittrack.io"):
        with Session(engine) as session:
            user = UserRepository(session).create(User(email=email, hashed_password="not-a-hash"))
        token = create_access_token(data={ "sub": email })
        return user, { "Authorization": f"Bearer {token}" }

    return _make


@pytest.fixture
def auth_headers(make_user):
    _, headers = make_user()
    return headers
