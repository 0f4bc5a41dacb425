"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time; pin them before importing the app
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_ENV"] = "local"
os.environ["OFFICE_TZ"] = "UTC"
os.environ["WORK_START_HOUR"] = "9"
os.environ["HALF_DAY_HOURS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from app.main import app
from app.db.base import Base
from app.core.deps import get_db
from app.core.security import hash_password
from app.models import User, Role  # noqa: F401  (registers tables)
from app.repositories.memory import InMemoryStore


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def store():
    """Empty in-memory record store for service-level tests"""
    return InMemoryStore()


# Hashing is slow; reuse one hash for every fixture user
_TEST_PASSWORD_HASH = hash_password("testpass123")


def make_user(
    name: str = "Test Employee",
    email: str = "employee@example.com",
    employee_id: str = "EMP1001",
    department: str = "Engineering",
    role: Role = Role.EMPLOYEE,
) -> User:
    """Build an unsaved User with the shared test password"""
    return User(
        name=name,
        email=email,
        password_hash=_TEST_PASSWORD_HASH,
        role=role.value,
        employee_id=employee_id,
        department=department,
    )


@pytest.fixture
def employee(store):
    """An employee saved in the in-memory store"""
    return store.insert_user(make_user())


def register_and_login(client, email: str, role: str = "employee", department: str = "Engineering",
                       name: str = "Test User", password: str = "testpass123") -> dict:
    """Register through the API, log in, and return auth headers plus the user payload"""
    response = client.post(
        "/api/v1/auth/register",
        json={
            "name": name,
            "email": email,
            "password": password,
            "department": department,
            "role": role,
        },
    )
    assert response.status_code == 201, response.json()
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.json()
    data = response.json()
    return {
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
        "user": data["user"],
    }
