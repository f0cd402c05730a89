"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/swipelist", "/swipelist_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


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


@pytest.fixture
def login(client):
    """Factory that signs a user in through Google and returns auth headers."""

    def _login(email: str, name: str = "Test User", provider_id: str | None = None) -> AuthHeaders:
        response = client.post(
            "/api/v1/auth/login",
            json={
                "provider": "google",
                "provider_id": provider_id or f"google-{email}",
                "email": email,
                "name": name,
            },
        )
        assert response.status_code == 200
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _login


@pytest.fixture
def auth_headers(login):
    """Create a user and return auth headers with user info."""
    return login("test@example.com", name="Test User")


@pytest.fixture
def other_headers(login):
    """A second, unrelated user."""
    return login("friend@example.com", name="Friend")


@pytest.fixture
def make_list(client):
    """Factory that creates a list and returns its id."""

    def _make_list(headers: AuthHeaders, title: str = "Trip", is_public: bool = False) -> int:
        response = client.post(
            "/api/v1/lists", headers=headers, json={"title": title, "is_public": is_public}
        )
        assert response.status_code == 200
        return response.json()["list"]["id"]

    return _make_list


@pytest.fixture
def add_content(client):
    """Factory that adds URL content to a list and returns the response."""

    def _add_content(headers: AuthHeaders, list_id: int, url: str = "https://example.com/a"):
        return client.post(
            "/api/v1/content",
            headers=headers,
            json={"list_id": list_id, "type": "url", "url": url},
        )

    return _add_content
