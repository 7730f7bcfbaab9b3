from typing import Optional
from datetime import date, datetime
from enum import Enum
from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint

from ._common import utcnow


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class AttendanceRecord(SQLModel, table=True):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("student_email", "course", "date", name="uq_attendance_student_course_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_email: Optional[str] = None
    student_email: str = Field(foreign_key="users.email", index=True)
    course: str = Field(index=True)
    date: date
    # Stored as given; only "present" counts toward the percentage
    status: str = AttendanceStatus.PRESENT.value
    recorded_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
