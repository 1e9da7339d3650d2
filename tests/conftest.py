"""
Brokerage Back-Office - Test Configuration

Pytest fixtures for the API and service layers.
Provides an in-memory database, a test client and admin fixtures.
"""

import os

# Cheap bcrypt cost for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from brokerage.app import app
from brokerage.auth.models import Admin, Role
from brokerage.auth.password import hash_password
from brokerage.database import get_session_factory, init_db, utcnow


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

SUPER_ADMIN_EMAIL = "owner@brokerage.test"
SUPER_ADMIN_PASSWORD = "OwnerPass123"
ADMIN_EMAIL = "agent@brokerage.test"
ADMIN_PASSWORD = "AgentPass123"


@pytest.fixture(scope="function")
def test_engine():
    """Create a fresh test database engine for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(scope="function")
def client(test_engine) -> Generator[TestClient, None, None]:
    """Create a test client bound to the fresh database."""
    app.state.db_engine = test_engine
    app.state.db_session_factory = get_session_factory(test_engine)

    with TestClient(app) as c:
        yield c


def _make_admin(db_session: Session, email: str, password: str, role: Role, name: str) -> Admin:
    admin = Admin(
        email=email,
        name=name,
        role=role,
        password_hash=hash_password(password),
        created_at=utcnow(),
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture(scope="function")
def super_admin(db_session) -> Admin:
    """The owner account (role super_admin)."""
    return _make_admin(db_session, SUPER_ADMIN_EMAIL, SUPER_ADMIN_PASSWORD, Role.SUPER_ADMIN, "Owner")


@pytest.fixture(scope="function")
def plain_admin(db_session) -> Admin:
    """A regular admin account (role admin)."""
    return _make_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD, Role.ADMIN, "Agent")


def login_admin(client: TestClient, email: str, password: str) -> Optional[str]:
    """Log in over HTTP and return the session token, or None on failure."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password},
    )
    if response.status_code != 200:
        return None
    return response.json()["session_token"]


def auth_headers(token: str) -> dict:
    """Authorization header for authenticated requests."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def super_admin_headers(client, super_admin) -> dict:
    return auth_headers(login_admin(client, SUPER_ADMIN_EMAIL, SUPER_ADMIN_PASSWORD))


@pytest.fixture(scope="function")
def admin_headers(client, plain_admin) -> dict:
    return auth_headers(login_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD))
