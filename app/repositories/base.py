"""
Record store contract consumed by the attendance services.

Both the SQLAlchemy store and the in-memory store implement this interface;
services only ever talk to an AttendanceStore handed to them by the caller.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from app.models.attendance import Attendance
from app.models.user import User

AttendanceWithUser = Tuple[Attendance, User]


class DuplicateRecordError(Exception):
    """Raised when an insert violates a uniqueness constraint."""


class AttendanceStore(ABC):
    # --- users ---

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_user_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def find_all_users(self) -> List[User]:
        raise NotImplementedError

    @abstractmethod
    def find_employees(self) -> List[User]:
        """Users whose role is employee."""
        raise NotImplementedError

    @abstractmethod
    def insert_user(self, user: User) -> User:
        raise NotImplementedError

    # --- attendance ---

    @abstractmethod
    def find_by_user_and_date(self, user_id: str, day: str) -> Optional[Attendance]:
        raise NotImplementedError

    @abstractmethod
    def find_by_user(self, user_id: str) -> List[Attendance]:
        """All records of one user, newest date first."""
        raise NotImplementedError

    @abstractmethod
    def find_by_date_range(
        self, from_day: str, to_day: str, user_id: Optional[str] = None
    ) -> List[AttendanceWithUser]:
        """Records with from_day <= date <= to_day joined with their user, newest date first."""
        raise NotImplementedError

    @abstractmethod
    def find_by_date(self, day: str) -> List[AttendanceWithUser]:
        raise NotImplementedError

    @abstractmethod
    def find_all_attendance(self) -> List[AttendanceWithUser]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, record: Attendance) -> Attendance:
        """Persist a new record; raises DuplicateRecordError for a second (user_id, date)."""
        raise NotImplementedError

    @abstractmethod
    def update(self, record_id: str, **fields) -> Optional[Attendance]:
        """Apply fields to an existing record; None when the id is unknown."""
        raise NotImplementedError
