"""
Record stores for users and attendance
"""
from app.repositories.base import AttendanceStore, DuplicateRecordError
from app.repositories.memory import InMemoryStore
from app.repositories.sql import SqlAlchemyStore

__all__ = [
    "AttendanceStore",
    "DuplicateRecordError",
    "InMemoryStore",
    "SqlAlchemyStore",
]
