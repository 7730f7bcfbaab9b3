from datetime import datetime
from sqlmodel import Field, SQLModel

from ._common import utcnow


class Enrollment(SQLModel, table=True):
    __tablename__ = "enrollment"
    user_id: int = Field(foreign_key="users.id", primary_key=True)
    course_id: int = Field(foreign_key="courses.id", primary_key=True)
    enrolled_at: datetime = Field(default_factory=utcnow)
