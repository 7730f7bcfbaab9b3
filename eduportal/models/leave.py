from typing import Optional
from datetime import date, datetime
from enum import Enum
from sqlmodel import Field, SQLModel

from ._common import utcnow


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveRequest(SQLModel, table=True):
    __tablename__ = "leave_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_email: str = Field(index=True)
    requester_type: str  # UserType value of the requester
    start_date: date
    end_date: date
    reason: str
    status: str = Field(default=LeaveStatus.PENDING.value, index=True)
    submitted_at: datetime = Field(default_factory=utcnow)
    processed_at: Optional[datetime] = None
