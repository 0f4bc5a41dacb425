"""
Aggregation and dashboard schemas
"""
from typing import List, Optional
from pydantic import BaseModel

from app.schemas.attendance import AttendanceOut
from app.schemas.user import UserOut


class DashboardStats(BaseModel):
    """Per-status counts and summed hours over a set of records"""
    total_present: int = 0
    total_absent: int = 0
    total_late: int = 0
    total_half_day: int = 0
    total_hours: int = 0


class WeeklyTrendItem(BaseModel):
    day: str
    date: str
    present: int
    absent: int
    late: int


class DepartmentStat(BaseModel):
    department: str
    present: int
    absent: int


class EmployeeDashboard(BaseModel):
    today_status: Optional[AttendanceOut] = None
    monthly_stats: DashboardStats
    recent_attendance: List[AttendanceOut]


class ManagerDashboard(BaseModel):
    total_employees: int
    today_present: int
    today_absent: int
    today_late: int
    weekly_trend: List[WeeklyTrendItem]
    department_stats: List[DepartmentStat]
    absent_today: List[UserOut]
