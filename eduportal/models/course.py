from typing import List, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Relationship

from ._common import utcnow
from .user import User
from .link_models import Enrollment


class Course(SQLModel, table=True):
    __tablename__ = "courses"

    id: Optional[int] = Field(default=None, primary_key=True)
    course_name: str
    description: Optional[str] = None
    department: str = Field(index=True)
    duration: str = "1 semester"
    teacher_email: str = Field(foreign_key="users.email", index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)

    students: List[User] = Relationship(back_populates="courses", link_model=Enrollment)
