"""
Authentication endpoints
"""
import logging
from fastapi import APIRouter, Depends, status
from app.core.deps import get_store, get_current_user
from app.core.security import create_access_token
from app.models.user import User
from app.repositories.base import AttendanceStore
from app.schemas.auth import RegisterRequest, LoginRequest, LoginResponse
from app.schemas.user import UserEnvelope, UserOut
from app.services.user_service import register_user, authenticate

router = APIRouter()
_log = logging.getLogger(__name__)


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    store: AttendanceStore = Depends(get_store),
):
    """
    Register a new employee or manager

    Validation failures return 400 with the first message; a taken email
    returns 400 "Email already registered".
    """
    user = register_user(store, body)
    return UserEnvelope(user=UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    store: AttendanceStore = Depends(get_store),
):
    """
    Authenticate by email and password and return a bearer token

    Token claims: sub (user id), role, employee_id.
    """
    user = authenticate(store, body.email, body.password)
    access_token = create_access_token(data={
        "sub": user.id,
        "role": user.role,
        "employee_id": user.employee_id,
    })
    _log.info("Login: user_id=%s", user.id)
    return LoginResponse(user=UserOut.model_validate(user), access_token=access_token)


@router.get("/me", response_model=UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    """Current authenticated user"""
    return UserEnvelope(user=UserOut.model_validate(current_user))
