from typing import List, Optional, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Relationship

from eduportal.security import hash_password, verify_password
from ._common import utcnow
from .link_models import Enrollment

if TYPE_CHECKING:
    from .course import Course


class UserType(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"
    ADMIN = "admin"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str
    type: str = Field(default=UserType.STUDENT.value, index=True)
    department: Optional[str] = Field(default=None, index=True)
    roll_number: Optional[str] = None
    subject: Optional[str] = None  # teachers
    father_name: Optional[str] = None  # students
    student_email: Optional[str] = None  # parents: the linked child
    performance_credits: int = 0
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)
    is_active: bool = True

    courses: List["Course"] = Relationship(back_populates="students", link_model=Enrollment)

    def set_password(self, password: str):
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)
