from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel

from ._common import utcnow


class ComplaintStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Complaint(SQLModel, table=True):
    __tablename__ = "complaints"

    id: Optional[int] = Field(default=None, primary_key=True)
    student_email: str = Field(index=True)
    title: str
    description: str
    category: Optional[str] = None
    status: str = Field(default=ComplaintStatus.OPEN.value, index=True)
    submitted_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
