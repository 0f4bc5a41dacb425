"""
User schemas (password hash is never exposed)
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_serializer

from app.utils.datetime_utils import iso_local


class UserOut(BaseModel):
    """Public view of a user"""
    id: str
    name: str
    email: str
    role: str
    employee_id: str
    department: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", when_used="always")
    def _ser_created_at(self, dt: datetime) -> str:
        return iso_local(dt)


class UserEnvelope(BaseModel):
    user: UserOut
