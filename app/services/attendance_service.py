"""
Attendance service - status classification and the check-in/check-out transitions

Per user and day the record moves NoRecord -> CheckedIn -> CheckedOut and never
back; repeating either action is an error, not a no-op.
"""
import logging
from datetime import datetime
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    InternalError,
    NotCheckedIn,
)
from app.models.attendance import Attendance, AttendanceStatus
from app.models.user import User
from app.repositories.base import AttendanceStore, DuplicateRecordError
from app.utils.datetime_utils import ensure_utc, hours_between, now_utc, to_local, today_key

_log = logging.getLogger(__name__)


def classify_check_in(check_in_at: datetime, work_start_hour: Optional[int] = None) -> AttendanceStatus:
    """
    Classify a check-in as present or late.

    Only the local hour is compared: with a 9 o'clock start, 09:00:00 and
    09:59:59 are both late and 08:59:59 is present.
    """
    if work_start_hour is None:
        work_start_hour = settings.WORK_START_HOUR
    if to_local(check_in_at).hour >= work_start_hour:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


def check_in(
    store: AttendanceStore,
    current_user: User,
    now: Optional[datetime] = None,
) -> Attendance:
    """
    Record the current user's check-in for today

    Args:
        store: Record store
        current_user: Authenticated user checking in
        now: Check-in instant (defaults to server UTC now)

    Returns:
        Today's Attendance record

    Raises:
        AlreadyCheckedIn: If today's record already has a check-in time
    """
    now = ensure_utc(now) if now else now_utc()
    day = today_key(now)
    status = classify_check_in(now).value

    existing = store.find_by_user_and_date(current_user.id, day)
    if existing and existing.check_in_time is not None:
        _log.warning("Duplicate check-in rejected: user_id=%s date=%s", current_user.id, day)
        raise AlreadyCheckedIn()

    if existing:
        # Placeholder row seeded without a check-in: fill it in place
        updated = store.update(existing.id, check_in_time=now, status=status)
        if updated is None:
            raise InternalError("Attendance record disappeared during check-in")
        _log.info("Check-in on existing record: user_id=%s date=%s status=%s", current_user.id, day, status)
        return updated

    record = Attendance(
        user_id=current_user.id,
        date=day,
        check_in_time=now,
        check_out_time=None,
        status=status,
        total_hours=0,
    )
    try:
        record = store.insert(record)
    except DuplicateRecordError:
        # A concurrent check-in for the same user and day won the insert
        _log.warning("Concurrent check-in lost the race: user_id=%s date=%s", current_user.id, day)
        raise AlreadyCheckedIn()

    _log.info("Check-in: user_id=%s date=%s status=%s", current_user.id, day, status)
    return record


def check_out(
    store: AttendanceStore,
    current_user: User,
    now: Optional[datetime] = None,
) -> Attendance:
    """
    Record the current user's check-out for today

    Hours worked are rounded half up to whole hours; a day shorter than
    settings.HALF_DAY_HOURS becomes half-day whatever the check-in status was.

    Raises:
        NotCheckedIn: If there is no check-in for today
        AlreadyCheckedOut: If today's record is already checked out
    """
    now = ensure_utc(now) if now else now_utc()
    day = today_key(now)

    record = store.find_by_user_and_date(current_user.id, day)
    if record is None or record.check_in_time is None:
        _log.warning("Check-out without check-in: user_id=%s date=%s", current_user.id, day)
        raise NotCheckedIn()

    if record.check_out_time is not None:
        _log.warning("Duplicate check-out rejected: user_id=%s date=%s", current_user.id, day)
        raise AlreadyCheckedOut()

    hours_worked = hours_between(record.check_in_time, now)
    status = record.status
    if hours_worked < settings.HALF_DAY_HOURS:
        status = AttendanceStatus.HALF_DAY.value

    updated = store.update(
        record.id,
        check_out_time=now,
        total_hours=hours_worked,
        status=status,
    )
    if updated is None:
        raise InternalError("Attendance record disappeared during check-out")

    _log.info(
        "Check-out: user_id=%s date=%s hours=%s status=%s",
        current_user.id, day, hours_worked, status,
    )
    return updated


def get_today(store: AttendanceStore, current_user: User, now: Optional[datetime] = None) -> Optional[Attendance]:
    """Today's record for the current user, or None."""
    return store.find_by_user_and_date(current_user.id, today_key(now))


def get_history(store: AttendanceStore, user_id: str) -> List[Attendance]:
    """All records of a user, newest first."""
    return store.find_by_user(user_id)
