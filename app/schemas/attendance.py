"""
Attendance schemas. All datetimes are rendered in the office timezone.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_serializer

from app.schemas.user import UserOut
from app.utils.datetime_utils import iso_local


class AttendanceOut(BaseModel):
    """Schema for one day's attendance record"""
    id: str
    user_id: str
    date: str
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: str
    total_hours: int = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("check_in_time", "check_out_time", "created_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class AttendanceWithUserOut(AttendanceOut):
    """Attendance record with its owning user (manager views)"""
    user: Optional[UserOut] = None

    @classmethod
    def from_pair(cls, record, user) -> "AttendanceWithUserOut":
        return cls.model_validate(record).model_copy(update={"user": UserOut.model_validate(user)})
