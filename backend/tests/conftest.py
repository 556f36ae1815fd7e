"""
Pytest configuration and fixtures for backend tests.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pos_api.main import create_app
from pos_api.models import Base, Table, User
from pos_shared.config.constants import Roles, TableStatus
from pos_shared.config.settings import Settings
from pos_shared.infrastructure.db import get_db
from pos_shared.security.auth import sign_jwt
from pos_shared.security.password import hash_password


TEST_PASSWORD = "testpass123"

# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = {
        "database_url": "sqlite://",
        "jwt_secret": "test-secret-with-at-least-32-characters!",
        "environment": "test",
        "debug": False,
        "rate_limit_enabled": False,
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def file_session_factory(path):
    """
    Session factory on a file-backed SQLite database.

    Unlike the shared in-memory connection, each session gets its own
    connection, so tests can use truly independent sessions or threads.
    """
    file_engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=file_engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=file_engine), file_engine


@pytest.fixture(scope="session")
def test_settings():
    return make_settings()


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture(scope="function")
def client(app, db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_employee(db_session):
    """Create an Employee account."""
    user = User(
        name="Test Employee",
        email="employee@test.com",
        password=hash_password(TEST_PASSWORD, rounds=4),
        role=Roles.EMPLOYEE,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_manager(db_session):
    """Create a Manager account."""
    user = User(
        name="Test Manager",
        email="manager@test.com",
        password=hash_password(TEST_PASSWORD, rounds=4),
        role=Roles.MANAGER,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_table(db_session):
    """Create a Free table named T1."""
    table = Table(name="T1", capacity=4, status=TableStatus.FREE.value)
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_occupied_table(db_session):
    """Create an Occupied table with a known access code."""
    table = Table(
        name="T9",
        capacity=2,
        status=TableStatus.OCCUPIED.value,
        access_code="known-access-code-0001",
        assigned_at=datetime.now(timezone.utc),
    )
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


def bearer(settings: Settings, sub: str = "user-1", **claims) -> dict[str, str]:
    """Authorization header for a token signed with the test settings."""
    token = sign_jwt({"sub": sub, **claims}, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers(test_settings, seed_employee):
    return bearer(
        test_settings, str(seed_employee.id), role=Roles.EMPLOYEE, email=seed_employee.email
    )


@pytest.fixture
def manager_headers(test_settings, seed_manager):
    return bearer(
        test_settings, str(seed_manager.id), role=Roles.MANAGER, email=seed_manager.email
    )
