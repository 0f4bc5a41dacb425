"""
Authentication schemas
"""
from typing import Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from app.models.user import Role
from app.schemas.user import UserOut


def _check_email(v: str) -> str:
    try:
        return validate_email(v, check_deliverability=False).normalized
    except EmailNotValidError:
        raise ValueError("Invalid email address")


class RegisterRequest(BaseModel):
    """Registration request schema"""
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address (unique)")
    password: str = Field(..., description="Password, at least 6 characters")
    department: str = Field(..., description="Department name")
    role: Role = Field(default=Role.EMPLOYEE, description="employee or manager")
    employee_id: Optional[str] = Field(None, description="Employee ID; generated as EMP#### when omitted")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password cannot be longer than 72 bytes when encoded as UTF-8")
        return v

    @field_validator("department")
    @classmethod
    def validate_department(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Department is required")
        return v

    @field_validator("employee_id")
    @classmethod
    def blank_employee_id_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class LoginRequest(BaseModel):
    """Login request schema"""
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class LoginResponse(BaseModel):
    """Login response: the user plus a bearer token"""
    user: UserOut
    access_token: str
    token_type: str = "bearer"
