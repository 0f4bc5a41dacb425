"""
User service - registration, login and roster lookups
"""
import logging
import random
from typing import List

from app.core.exceptions import (
    EmailAlreadyRegistered,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.repositories.base import AttendanceStore, DuplicateRecordError
from app.schemas.auth import RegisterRequest

_log = logging.getLogger(__name__)


def generate_employee_id() -> str:
    """Random employee code in the EMP1000..EMP9999 range."""
    return f"EMP{random.randint(1000, 9999)}"


def next_free_employee_id(store: AttendanceStore) -> str:
    """Draw employee codes until one is not taken."""
    employee_id = generate_employee_id()
    while store.get_user_by_employee_id(employee_id) is not None:
        employee_id = generate_employee_id()
    return employee_id


def register_user(store: AttendanceStore, data: RegisterRequest) -> User:
    """
    Create a new user

    Raises:
        EmailAlreadyRegistered: If the email is taken
        ValidationError: If an explicit employee_id is taken
    """
    if store.get_user_by_email(data.email):
        raise EmailAlreadyRegistered()

    if data.employee_id:
        if store.get_user_by_employee_id(data.employee_id):
            raise ValidationError("Employee ID already registered")
        employee_id = data.employee_id
    else:
        employee_id = next_free_employee_id(store)

    user = User(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role.value,
        employee_id=employee_id,
        department=data.department,
    )
    try:
        user = store.insert_user(user)
    except DuplicateRecordError:
        # Lost a race against a concurrent registration; report the column that collided
        if store.get_user_by_employee_id(employee_id) is not None:
            raise ValidationError("Employee ID already registered")
        raise EmailAlreadyRegistered()

    _log.info("Registered user: id=%s employee_id=%s role=%s", user.id, user.employee_id, user.role)
    return user


def authenticate(store: AttendanceStore, email: str, password: str) -> User:
    """Return the user for valid credentials, else raise InvalidCredentials."""
    user = store.get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        _log.warning("Failed login for email=%s", email)
        raise InvalidCredentials()
    return user


def get_user_or_404(store: AttendanceStore, user_id: str) -> User:
    user = store.get_user(user_id)
    if user is None:
        raise NotFound()
    return user


def list_employees(store: AttendanceStore) -> List[User]:
    return store.find_employees()
