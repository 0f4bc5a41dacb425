"""
Aggregation service - summaries and dashboards built from attendance records

Two notions of absence coexist on purpose:
- aggregate() counts records whose stored status is "absent"; it never
  invents absence for days without a record.
- absent_today() and the dashboards diff the employee roster against the
  day's records, so an employee with no record that day is absent.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.config import settings
from app.models.attendance import Attendance, AttendanceStatus
from app.models.user import User
from app.repositories.base import AttendanceStore
from app.schemas.attendance import AttendanceOut
from app.schemas.dashboard import (
    DashboardStats,
    DepartmentStat,
    EmployeeDashboard,
    ManagerDashboard,
    WeeklyTrendItem,
)
from app.schemas.user import UserOut
from app.utils.datetime_utils import (
    WEEKDAY_LABELS,
    date_key,
    month_bounds,
    now_utc,
    today_key,
    week_days,
)

_log = logging.getLogger(__name__)

ON_SITE_STATUSES = (AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value)


def _count(records: Iterable[Attendance], status: AttendanceStatus) -> int:
    return sum(1 for a in records if a.status == status.value)


def aggregate(records: Sequence[Attendance]) -> DashboardStats:
    """Count records per status and sum their hours."""
    return DashboardStats(
        total_present=_count(records, AttendanceStatus.PRESENT),
        total_absent=_count(records, AttendanceStatus.ABSENT),
        total_late=_count(records, AttendanceStatus.LATE),
        total_half_day=_count(records, AttendanceStatus.HALF_DAY),
        total_hours=sum(a.total_hours or 0 for a in records),
    )


def filter_by_date_range(records: Iterable[Attendance], from_day: str, to_day: str) -> List[Attendance]:
    """
    Keep records with from_day <= date <= to_day.

    Keys are fixed-width zero-padded "YYYY-MM-DD" strings, so plain string
    comparison orders them the same way as the dates they name.
    """
    return [a for a in records if from_day <= a.date <= to_day]


def absent_today(employees: Sequence[User], todays_records: Iterable[Attendance]) -> List[User]:
    """Employees with no record in todays_records, in roster order."""
    seen = {a.user_id for a in todays_records}
    return [u for u in employees if u.id not in seen]


def weekly_trend(
    employees: Sequence[User],
    week_records: Sequence[Attendance],
    now: Optional[datetime] = None,
) -> List[WeeklyTrendItem]:
    """
    One bucket per day of the week containing `now`, Sunday first.

    present/late are status counts for the day; absent is the roster diff for
    days up to today and 0 for days that have not happened yet.
    """
    today = today_key(now)
    by_day: Dict[str, List[Attendance]] = {}
    for record in week_records:
        by_day.setdefault(record.date, []).append(record)

    trend = []
    for label, day in zip(WEEKDAY_LABELS, week_days(now)):
        key = date_key(day)
        day_records = by_day.get(key, [])
        if key <= today:
            absent = len(absent_today(employees, day_records))
        else:
            absent = 0
        trend.append(WeeklyTrendItem(
            day=label,
            date=key,
            present=_count(day_records, AttendanceStatus.PRESENT),
            absent=absent,
            late=_count(day_records, AttendanceStatus.LATE),
        ))
    return trend


def department_breakdown(employees: Sequence[User], todays_records: Sequence[Attendance]) -> List[DepartmentStat]:
    """Present (present or late) and roster-diff absent counts per department, first-seen order."""
    departments: Dict[str, List[User]] = {}
    for employee in employees:
        departments.setdefault(employee.department, []).append(employee)

    stats = []
    for department, members in departments.items():
        member_ids = {u.id for u in members}
        dept_records = [a for a in todays_records if a.user_id in member_ids]
        stats.append(DepartmentStat(
            department=department,
            present=sum(1 for a in dept_records if a.status in ON_SITE_STATUSES),
            absent=len(absent_today(members, dept_records)),
        ))
    return stats


def monthly_summary(store: AttendanceStore, user_id: str, now: Optional[datetime] = None) -> DashboardStats:
    """Summary of one user's records in the month containing `now`."""
    first_day, last_day = month_bounds(now)
    return aggregate(filter_by_date_range(store.find_by_user(user_id), first_day, last_day))


def period_summary(
    store: AttendanceStore,
    from_day: str,
    to_day: str,
    user_id: Optional[str] = None,
) -> DashboardStats:
    """Summary over an inclusive date range, optionally for one user."""
    records = [a for a, _ in store.find_by_date_range(from_day, to_day, user_id)]
    return aggregate(filter_by_date_range(records, from_day, to_day))


def employee_dashboard(
    store: AttendanceStore,
    current_user: User,
    now: Optional[datetime] = None,
) -> EmployeeDashboard:
    """Today's record, this month's stats and the most recent records of the current user."""
    now = now or now_utc()
    first_day, last_day = month_bounds(now)
    history = store.find_by_user(current_user.id)
    today = store.find_by_user_and_date(current_user.id, today_key(now))

    return EmployeeDashboard(
        today_status=AttendanceOut.model_validate(today) if today else None,
        monthly_stats=aggregate(filter_by_date_range(history, first_day, last_day)),
        recent_attendance=[
            AttendanceOut.model_validate(a) for a in history[:settings.RECENT_ATTENDANCE_LIMIT]
        ],
    )


def manager_dashboard(store: AttendanceStore, now: Optional[datetime] = None) -> ManagerDashboard:
    """Team-wide view for today and the current week."""
    now = now or now_utc()
    employees = store.find_employees()
    todays_records = [a for a, _ in store.find_by_date(today_key(now))]

    days = week_days(now)
    week_records = [
        a for a, _ in store.find_by_date_range(date_key(days[0]), date_key(days[-1]))
    ]

    missing = absent_today(employees, todays_records)
    _log.debug(
        "Manager dashboard: employees=%s records_today=%s absent=%s",
        len(employees), len(todays_records), len(missing),
    )

    return ManagerDashboard(
        total_employees=len(employees),
        today_present=sum(1 for a in todays_records if a.status in ON_SITE_STATUSES),
        today_absent=len(missing),
        today_late=_count(todays_records, AttendanceStatus.LATE),
        weekly_trend=weekly_trend(employees, week_records, now),
        department_stats=department_breakdown(employees, todays_records),
        absent_today=[UserOut.model_validate(u) for u in missing],
    )
