"""
User endpoints (manager only)
"""
from typing import List
from fastapi import APIRouter, Depends
from app.core.deps import get_store, require_manager
from app.models.user import User
from app.repositories.base import AttendanceStore
from app.schemas.user import UserOut
from app.services.user_service import list_employees

router = APIRouter()


@router.get("/employees", response_model=List[UserOut])
def employees_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """List every user with the employee role"""
    return [UserOut.model_validate(u) for u in list_employees(store)]
