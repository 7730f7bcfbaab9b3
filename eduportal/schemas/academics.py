from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .fields import Email


class AttendanceForm(BaseModel):
    student_email: Email
    course: str
    date: date
    status: str


class AttendanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    teacher_email: Optional[str] = None
    student_email: str
    course: str
    date: date
    status: str
    recorded_at: datetime
    updated_at: Optional[datetime] = None


class GradeForm(BaseModel):
    student_email: Email
    course: str
    grade: str
    semester: str
    assignment_id: str = ""


class GradeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    teacher_email: Optional[str] = None
    student_email: str
    course: str
    semester: str
    assignment_id: str
    letter_grade: str
    uploaded_at: datetime
    updated_at: Optional[datetime] = None


class SemesterResultLineForm(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_email: Email
    grade: Optional[str] = None
    marks: Optional[float] = None
    remarks: Optional[str] = None


class SemesterResultsForm(BaseModel):
    course: str
    semester: str
    results: List[SemesterResultLineForm] = Field(min_length=1)


class SemesterResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    teacher_email: str
    course: str
    semester: str
    published_at: datetime
    lines: List[SemesterResultLineForm]
