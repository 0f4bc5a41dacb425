"""
Report service - attendance rows for CSV export
"""
from typing import Dict, List, Optional

from app.core.exceptions import ValidationError
from app.repositories.base import AttendanceStore
from app.utils.datetime_utils import format_time_12h

ATTENDANCE_CSV_HEADERS = [
    "Employee Name",
    "Employee ID",
    "Department",
    "Date",
    "Check In",
    "Check Out",
    "Hours",
    "Status",
]


def get_attendance_rows(
    store: AttendanceStore,
    from_day: str,
    to_day: str,
    user_id: Optional[str] = None,
) -> List[Dict]:
    """
    Get attendance rows for export, newest date first

    Args:
        store: Record store
        from_day: Start date key (inclusive)
        to_day: End date key (inclusive)
        user_id: Optional filter on one user

    Returns:
        List of dictionaries keyed by ATTENDANCE_CSV_HEADERS; missing
        check-in/check-out times are empty strings.
    """
    if from_day > to_day:
        raise ValidationError("from must be on or before to")

    rows: List[Dict] = []
    for record, user in store.find_by_date_range(from_day, to_day, user_id):
        rows.append({
            "Employee Name": user.name,
            "Employee ID": user.employee_id,
            "Department": user.department,
            "Date": record.date,
            "Check In": format_time_12h(record.check_in_time),
            "Check Out": format_time_12h(record.check_out_time),
            "Hours": record.total_hours or 0,
            "Status": record.status,
        })
    return rows
