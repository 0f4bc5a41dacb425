"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.core.exceptions import Forbidden, NotAuthenticated
from app.core.security import decode_token
from app.models.user import User
from app.repositories.base import AttendanceStore
from app.repositories.sql import SqlAlchemyStore


# auto_error=False so a missing header becomes our NotAuthenticated (401), not a bare 403
security = HTTPBearer(auto_error=False)


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> AttendanceStore:
    """Record store bound to the request's database session"""
    return SqlAlchemyStore(db)


# Store-backed dependencies and endpoints are plain def so FastAPI runs them in its threadpool
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: AttendanceStore = Depends(get_store),
) -> User:
    """
    Resolve the authenticated user from the bearer token

    The returned User is the explicit identity handed to every service call.
    """
    if credentials is None:
        raise NotAuthenticated()

    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise NotAuthenticated("Invalid authentication credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise NotAuthenticated("Invalid authentication credentials")

    user = store.get_user(str(user_id))
    if user is None:
        raise NotAuthenticated("User not found")

    return user


def require_manager(current_user: User = Depends(get_current_user)) -> User:
    """
    Allow only managers

    Usage:
        @router.get("/team")
        def team(user: User = Depends(require_manager)):
            ...
    """
    if not current_user.is_manager:
        raise Forbidden()
    return current_user
