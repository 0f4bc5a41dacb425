"""
SQLAlchemy-backed record store
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.attendance import Attendance
from app.models.user import User, Role
from app.repositories.base import AttendanceStore, AttendanceWithUser, DuplicateRecordError

_log = logging.getLogger(__name__)


class SqlAlchemyStore(AttendanceStore):
    def __init__(self, db: Session):
        self.db = db

    def _commit_new(self, obj):
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            _log.warning("Insert rejected by constraint on %s: %s", obj.__tablename__, e.orig)
            raise DuplicateRecordError(str(e.orig)) from e
        self.db.refresh(obj)
        return obj

    # --- users ---

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.employee_id == employee_id).first()

    def find_all_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at).all()

    def find_employees(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == Role.EMPLOYEE.value)
            .order_by(User.created_at)
            .all()
        )

    def insert_user(self, user: User) -> User:
        return self._commit_new(user)

    # --- attendance ---

    def _joined(self):
        return self.db.query(Attendance, User).join(User, Attendance.user_id == User.id)

    def find_by_user_and_date(self, user_id: str, day: str) -> Optional[Attendance]:
        return self.db.query(Attendance).filter(
            Attendance.user_id == user_id,
            Attendance.date == day,
        ).first()

    def find_by_user(self, user_id: str) -> List[Attendance]:
        return (
            self.db.query(Attendance)
            .filter(Attendance.user_id == user_id)
            .order_by(Attendance.date.desc())
            .all()
        )

    def find_by_date_range(
        self, from_day: str, to_day: str, user_id: Optional[str] = None
    ) -> List[AttendanceWithUser]:
        query = self._joined().filter(
            Attendance.date >= from_day,
            Attendance.date <= to_day,
        )
        if user_id:
            query = query.filter(Attendance.user_id == user_id)
        return [tuple(row) for row in query.order_by(Attendance.date.desc(), User.name).all()]

    def find_by_date(self, day: str) -> List[AttendanceWithUser]:
        rows = self._joined().filter(Attendance.date == day).order_by(User.name).all()
        return [tuple(row) for row in rows]

    def find_all_attendance(self) -> List[AttendanceWithUser]:
        rows = self._joined().order_by(Attendance.date.desc(), User.name).all()
        return [tuple(row) for row in rows]

    def insert(self, record: Attendance) -> Attendance:
        return self._commit_new(record)

    def update(self, record_id: str, **fields) -> Optional[Attendance]:
        record = self.db.get(Attendance, record_id)
        if record is None:
            return None
        for key, value in fields.items():
            setattr(record, key, value)
        self.db.commit()
        self.db.refresh(record)
        return record
