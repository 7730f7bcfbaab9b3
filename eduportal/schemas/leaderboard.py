from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eduportal.services.leaderboard import MONTHS
from .fields import Email


class TopStudent(BaseModel):
    email: Email
    name: Optional[str] = None


class LeaderboardForm(BaseModel):
    month: str
    year: int
    top_students: List[TopStudent] = Field(min_length=1)

    @field_validator("month")
    @classmethod
    def known_month(cls, value: str) -> str:
        month = value.strip().capitalize()
        if month not in MONTHS:
            raise ValueError(f"month must be one of {', '.join(MONTHS)}")
        return month


class LeaderboardEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_email: str
    name: Optional[str] = None
    position: int
    credits: int


class LeaderboardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    month: str
    year: int
    teacher_email: str
    created_at: datetime
    entries: List[LeaderboardEntryOut]
