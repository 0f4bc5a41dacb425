"""
Database models
"""
from app.models.user import User, Role
from app.models.attendance import Attendance, AttendanceStatus

__all__ = [
    "User",
    "Role",
    "Attendance",
    "AttendanceStatus",
]
