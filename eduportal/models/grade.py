from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint

from ._common import utcnow


class GradeRecord(SQLModel, table=True):
    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("student_email", "course", "semester", "assignment_id", name="uq_grade_natural_key"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_email: Optional[str] = None
    student_email: str = Field(foreign_key="users.email", index=True)
    course: str = Field(index=True)
    semester: str
    assignment_id: str = ""  # empty for course-level grades
    letter_grade: str
    uploaded_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
