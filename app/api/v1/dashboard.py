"""
Dashboard endpoints
"""
from fastapi import APIRouter, Depends
from app.core.deps import get_store, get_current_user, require_manager
from app.models.user import User
from app.repositories.base import AttendanceStore
from app.schemas.dashboard import EmployeeDashboard, ManagerDashboard
from app.services.aggregation_service import employee_dashboard, manager_dashboard

router = APIRouter()


@router.get("/employee", response_model=EmployeeDashboard)
def employee_dashboard_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """Today's record, this month's stats and recent records of the current user."""
    return employee_dashboard(store, current_user)


@router.get("/manager", response_model=ManagerDashboard)
def manager_dashboard_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """
    Team view for today and the current week

    Absence here is computed by diffing the employee roster against today's
    records, not by reading stored statuses.
    """
    return manager_dashboard(store)
