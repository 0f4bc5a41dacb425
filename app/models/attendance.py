"""
Attendance model: one row per user per calendar day
"""
import enum
import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.utils.datetime_utils import now_utc


class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # "YYYY-MM-DD" in the office timezone
    check_in_time = Column(DateTime(timezone=True), nullable=True)  # UTC
    check_out_time = Column(DateTime(timezone=True), nullable=True)  # UTC
    status = Column(String, nullable=False, default=AttendanceStatus.PRESENT.value)
    total_hours = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
    )

    # Relationships
    user = relationship("User", backref="attendance_records")
