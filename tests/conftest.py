"""Pytest configuration and fixtures."""

import os

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    os.environ["DATABASE_URL"] = os.environ["DATABASE_URL"].replace("/coaching", "/coaching_test")
else:
    # Running locally - use SQLite
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["ENVIRONMENT"] = "test"
# Cheap hashes keep the suite fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, engine, get_db  # noqa: E402
from src.main import app  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user."""

    def __init__(self, *args, user_id: int | None = None, email: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_user(client, email: str, password: str = "testpass123", name: str = "Test User"):
    """Register a user and return auth headers carrying its id and email."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_user(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register_user(client, "other@example.com", name="Other User")


@pytest.fixture
def make_user(client):
    """Factory registering extra users on the test client."""

    def _make_user(email: str, password: str = "testpass123", name: str = "Test User"):
        return register_user(client, email, password, name)

    return _make_user
