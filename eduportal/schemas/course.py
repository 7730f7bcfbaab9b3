from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .fields import Email


class CourseForm(BaseModel):
    course_name: str
    department: str
    description: Optional[str] = None
    duration: Optional[str] = None


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_name: str
    description: Optional[str] = None
    department: str
    duration: str
    teacher_email: str
    created_at: datetime


class EnrollForm(BaseModel):
    student_email: Email
    course_id: int
