"""
Tests for authentication endpoints
"""
import re
from fastapi import status
from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token, decode_token
from app.tests.conftest import register_and_login


def register(client, **overrides):
    body = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "secret123",
        "department": "Engineering",
    }
    body.update(overrides)
    return client.post("/api/v1/auth/register", json=body)


def test_register_success(client, db):
    """Test registration returns the user without the password hash"""
    response = register(client)

    assert response.status_code == status.HTTP_201_CREATED
    user = response.json()["user"]
    assert user["name"] == "Jane Doe"
    assert user["email"] == "jane@example.com"
    assert user["role"] == "employee"
    assert user["department"] == "Engineering"
    assert re.fullmatch(r"EMP\d{4}", user["employee_id"])
    assert "password_hash" not in user
    assert "password" not in user


def test_register_duplicate_email(client, db):
    """Test registering the same email twice"""
    assert register(client).status_code == status.HTTP_201_CREATED

    response = register(client, name="Someone Else")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Email already registered"


def test_register_validation_returns_first_message(client, db):
    """Test invalid input returns 400 with a readable message"""
    response = register(client, name="J")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["detail"] == "Name must be at least 2 characters"
    assert data["error"] is True
    assert data["path"] == "/api/v1/auth/register"


def test_register_short_password(client, db):
    """Test passwords shorter than six characters are rejected"""
    response = register(client, password="12345")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Password must be at least 6 characters"


def test_register_invalid_role(client, db):
    """Test only employee and manager roles are accepted"""
    response = register(client, role="admin")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_login_success(client, db):
    """Test login returns a bearer token carrying id, role and employee ID"""
    user = register(client, role="manager").json()["user"]

    response = client.post("/api/v1/auth/login", json={"email": "jane@example.com", "password": "secret123"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == user["id"]

    claims = decode_token(data["access_token"])
    assert claims["sub"] == user["id"]
    assert claims["role"] == "manager"
    assert claims["employee_id"] == user["employee_id"]
    assert "exp" in claims


def test_login_wrong_password(client, db):
    """Test login with wrong password"""
    register(client)

    response = client.post("/api/v1/auth/login", json={"email": "jane@example.com", "password": "wrongpass"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(client, db):
    """Test login for an email that never registered gets the same answer"""
    response = client.post("/api/v1/auth/login", json={"email": "ghost@example.com", "password": "secret123"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_me(client, db):
    """Test /me resolves the token's user"""
    session = register_and_login(client, "jane@example.com")

    response = client.get("/api/v1/auth/me", headers=session["headers"])

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["email"] == "jane@example.com"


def test_me_without_token(client, db):
    """Test missing credentials are a 401 with a Bearer challenge"""
    response = client.get("/api/v1/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Not authenticated"
    assert response.headers["www-authenticate"] == "Bearer"


def test_me_with_garbage_token(client, db):
    """Test an undecodable token is a 401"""
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid authentication credentials"


def test_me_with_expired_token(client, db):
    """Test an expired token is a 401"""
    session = register_and_login(client, "jane@example.com")
    token = create_access_token({"sub": session["user"]["id"]}, expires_minutes=-1)

    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_with_token_for_deleted_user(client, db):
    """Test a well-formed token for an unknown user id is a 401"""
    token = jwt.encode({"sub": "no-such-user"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "User not found"
