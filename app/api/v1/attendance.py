"""
Attendance endpoints: check-in/out for the current user, history and summaries,
plus manager-only team views and CSV export.
"""
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from app.constants import ATTENDANCE_REPORT_PREFIX
from app.core.deps import get_store, get_current_user, require_manager
from app.core.exceptions import ValidationError
from app.models.user import User
from app.repositories.base import AttendanceStore
from app.schemas.attendance import AttendanceOut, AttendanceWithUserOut
from app.schemas.dashboard import DashboardStats
from app.services.attendance_service import check_in, check_out, get_today, get_history
from app.services.aggregation_service import monthly_summary, period_summary
from app.services.report_service import ATTENDANCE_CSV_HEADERS, get_attendance_rows
from app.services.user_service import get_user_or_404
from app.utils.csv_export import stream_csv
from app.utils.datetime_utils import date_key, month_bounds, today_key

router = APIRouter()
_log = logging.getLogger(__name__)


def _resolve_range(from_date: Optional[date], to_date: Optional[date]):
    """Date keys for the requested range; the current month fills missing bounds."""
    month_first, month_last = month_bounds()
    from_day = date_key(from_date) if from_date else month_first
    to_day = date_key(to_date) if to_date else month_last
    if from_day > to_day:
        raise ValidationError("from must be on or before to")
    return from_day, to_day


@router.post("/checkin", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def checkin_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """
    Check in for today. No body.
    Second check-in on the same day => 400 "Already checked in today".
    """
    return AttendanceOut.model_validate(check_in(store, current_user))


@router.post("/checkout", response_model=AttendanceOut)
def checkout_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """
    Check out for today. No body.
    Without a check-in => 400 "Not checked in yet"; twice => 400 "Already checked out today".
    """
    return AttendanceOut.model_validate(check_out(store, current_user))


@router.get("/today", response_model=Optional[AttendanceOut])
def today_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """Today's record for the current user, or null."""
    record = get_today(store, current_user)
    return AttendanceOut.model_validate(record) if record else None


@router.get("/my-history", response_model=List[AttendanceOut])
def my_history_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """All records of the current user, newest first."""
    return [AttendanceOut.model_validate(a) for a in get_history(store, current_user.id)]


@router.get("/my-summary", response_model=DashboardStats)
def my_summary_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """Status counts and hours of the current user for the current month."""
    return monthly_summary(store, current_user.id)


@router.get("/all", response_model=List[AttendanceWithUserOut])
def all_attendance_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """Every record with its user, newest first."""
    return [AttendanceWithUserOut.from_pair(a, u) for a, u in store.find_all_attendance()]


@router.get("/employee/{user_id}", response_model=List[AttendanceOut])
def employee_attendance_endpoint(
    user_id: str,
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """Records of one user, newest first. Unknown user => 404."""
    get_user_or_404(store, user_id)
    return [AttendanceOut.model_validate(a) for a in get_history(store, user_id)]


@router.get("/today-status", response_model=List[AttendanceWithUserOut])
def today_status_endpoint(
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """Today's records for everyone, with users."""
    return [AttendanceWithUserOut.from_pair(a, u) for a, u in store.find_by_date(today_key())]


@router.get("/summary", response_model=DashboardStats)
def summary_endpoint(
    from_date: Optional[date] = Query(None, alias="from", description="Start date (YYYY-MM-DD), default first day of this month"),
    to_date: Optional[date] = Query(None, alias="to", description="End date (YYYY-MM-DD), default last day of this month"),
    employee_id: Optional[str] = Query(None, description="Restrict to one user id"),
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """Status counts and hours over an inclusive date range."""
    from_day, to_day = _resolve_range(from_date, to_date)
    return period_summary(store, from_day, to_day, employee_id)


@router.get("/export")
def export_endpoint(
    from_date: Optional[date] = Query(None, alias="from", description="Start date (YYYY-MM-DD), default first day of this month"),
    to_date: Optional[date] = Query(None, alias="to", description="End date (YYYY-MM-DD), default last day of this month"),
    employee_id: Optional[str] = Query(None, description="Restrict to one user id"),
    store: AttendanceStore = Depends(get_store),
    current_user: User = Depends(require_manager),
):
    """
    Export attendance as CSV

    Columns: Employee Name, Employee ID, Department, Date, Check In, Check Out,
    Hours, Status. Times are "hh:mm AM/PM"; a missing time is an empty field.
    """
    from_day, to_day = _resolve_range(from_date, to_date)
    rows = get_attendance_rows(store, from_day, to_day, employee_id)
    _log.info(
        "Attendance export: by=%s from=%s to=%s employee_id=%s rows=%s",
        current_user.id, from_day, to_day, employee_id, len(rows),
    )
    filename = f"{ATTENDANCE_REPORT_PREFIX}_{from_day}_{to_day}.csv"
    return stream_csv(headers=ATTENDANCE_CSV_HEADERS, rows=rows, filename=filename)
