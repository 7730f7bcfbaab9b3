from typing import List, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Relationship

from ._common import utcnow


class SemesterResult(SQLModel, table=True):
    __tablename__ = "semester_results"

    id: Optional[int] = Field(default=None, primary_key=True)
    teacher_email: str
    course: str
    semester: str
    published_at: datetime = Field(default_factory=utcnow)

    lines: List["SemesterResultLine"] = Relationship(back_populates="result")


class SemesterResultLine(SQLModel, table=True):
    __tablename__ = "semester_result_lines"

    id: Optional[int] = Field(default=None, primary_key=True)
    result_id: int = Field(foreign_key="semester_results.id", index=True)
    student_email: str = Field(index=True)
    grade: Optional[str] = None
    marks: Optional[float] = None
    remarks: Optional[str] = None

    result: "SemesterResult" = Relationship(back_populates="lines")
