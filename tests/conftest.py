"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db, init_db
from src.main import app
from src.schemas.recipe import RecipeCreate
from src.services.recipe_service import RecipeService


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-in user's identity."""

    def __init__(self, *args, user_id: int | None = None, email: str = "", name: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.name = name


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/recipe_finder", "/recipe_finder_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Reference data seeded once per session and kept between tests
PRESERVED_TABLES = {"allergens"}


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    init_db(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        if table.name not in PRESERVED_TABLES:
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


def _signup(client, email: str, name: str) -> AuthHeaders:
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": email, "password": "testpass123", "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['accessToken']}"},
        user_id=data["user"]["id"],
        email=email,
        name=name,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _signup(client, "test@example.com", "Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return _signup(client, "other@example.com", "Other User")


@pytest.fixture
def make_recipe(db):
    """Factory that stores a recipe directly and returns its id."""

    def _make_recipe(title: str = "Test Recipe", **fields) -> int:
        recipe = RecipeService(db).create_recipe(RecipeCreate(title=title, **fields))
        return recipe.id

    return _make_recipe
