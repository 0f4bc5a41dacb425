"""
In-memory record store.

Used by the service tests and handy for local experiments; it enforces the
same uniqueness rules as the database schema.
"""
import uuid
from typing import Dict, List, Optional

from app.models.attendance import Attendance
from app.models.user import User, Role
from app.repositories.base import AttendanceStore, AttendanceWithUser, DuplicateRecordError
from app.utils.datetime_utils import now_utc


class InMemoryStore(AttendanceStore):
    def __init__(self):
        self.users: Dict[str, User] = {}
        self.records: Dict[str, Attendance] = {}

    # --- users ---

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_user_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.employee_id == employee_id), None)

    def find_all_users(self) -> List[User]:
        return list(self.users.values())

    def find_employees(self) -> List[User]:
        return [u for u in self.users.values() if u.role == Role.EMPLOYEE.value]

    def insert_user(self, user: User) -> User:
        if self.get_user_by_email(user.email):
            raise DuplicateRecordError(f"email {user.email} already exists")
        if self.get_user_by_employee_id(user.employee_id):
            raise DuplicateRecordError(f"employee_id {user.employee_id} already exists")
        user.id = user.id or str(uuid.uuid4())
        user.role = user.role or Role.EMPLOYEE.value
        user.created_at = user.created_at or now_utc()
        self.users[user.id] = user
        return user

    # --- attendance ---

    def _with_user(self, records: List[Attendance]) -> List[AttendanceWithUser]:
        # Records whose user is gone are skipped, as an inner join would
        return [(a, self.users[a.user_id]) for a in records if a.user_id in self.users]

    @staticmethod
    def _newest_first(records: List[Attendance]) -> List[Attendance]:
        return sorted(records, key=lambda a: a.date, reverse=True)

    def find_by_user_and_date(self, user_id: str, day: str) -> Optional[Attendance]:
        return next(
            (a for a in self.records.values() if a.user_id == user_id and a.date == day),
            None,
        )

    def find_by_user(self, user_id: str) -> List[Attendance]:
        return self._newest_first([a for a in self.records.values() if a.user_id == user_id])

    def find_by_date_range(
        self, from_day: str, to_day: str, user_id: Optional[str] = None
    ) -> List[AttendanceWithUser]:
        matches = [
            a for a in self.records.values()
            if from_day <= a.date <= to_day and (not user_id or a.user_id == user_id)
        ]
        return self._with_user(self._newest_first(matches))

    def find_by_date(self, day: str) -> List[AttendanceWithUser]:
        return self._with_user([a for a in self.records.values() if a.date == day])

    def find_all_attendance(self) -> List[AttendanceWithUser]:
        return self._with_user(self._newest_first(list(self.records.values())))

    def insert(self, record: Attendance) -> Attendance:
        if self.find_by_user_and_date(record.user_id, record.date):
            raise DuplicateRecordError(f"attendance for {record.user_id} on {record.date} already exists")
        record.id = record.id or str(uuid.uuid4())
        record.created_at = record.created_at or now_utc()
        if record.total_hours is None:
            record.total_hours = 0
        self.records[record.id] = record
        return record

    def update(self, record_id: str, **fields) -> Optional[Attendance]:
        record = self.records.get(record_id)
        if record is None:
            return None
        for key, value in fields.items():
            setattr(record, key, value)
        return record
