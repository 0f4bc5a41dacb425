"""
User model
"""
import enum
import uuid

from sqlalchemy import Column, String, DateTime
from app.db.base import Base
from app.utils.datetime_utils import now_utc


class Role(str, enum.Enum):
    EMPLOYEE = "employee"
    MANAGER = "manager"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.EMPLOYEE.value)
    employee_id = Column(String, unique=True, nullable=False, index=True)  # e.g. EMP4821
    department = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER.value
