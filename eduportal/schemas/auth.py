from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .fields import Email


class LoginForm(BaseModel):
    email: Email
    password: str


class RegisterForm(BaseModel):
    email: Email
    password: str
    name: str
    type: str = "student"
    department: Optional[str] = None
    roll_number: Optional[str] = None
    subject: Optional[str] = None
    father_name: Optional[str] = None
    parent_email: Optional[Email] = None
    parent_password: Optional[str] = None


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    type: str
    department: Optional[str] = None
    roll_number: Optional[str] = None
    subject: Optional[str] = None
    father_name: Optional[str] = None
    student_email: Optional[str] = None
    performance_credits: int = 0
    created_at: datetime
