from typing import List, Optional
from datetime import datetime
from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import UniqueConstraint

from ._common import utcnow


class Leaderboard(SQLModel, table=True):
    __tablename__ = "leaderboards"
    __table_args__ = (
        UniqueConstraint("month", "year", name="uq_leaderboard_period"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    month: str  # "January" .. "December"
    year: int
    teacher_email: str
    created_at: datetime = Field(default_factory=utcnow)

    entries: List["LeaderboardEntry"] = Relationship(
        back_populates="leaderboard",
        sa_relationship_kwargs={"order_by": "LeaderboardEntry.position"},
    )


class LeaderboardEntry(SQLModel, table=True):
    __tablename__ = "leaderboard_entries"
    __table_args__ = (
        UniqueConstraint("leaderboard_id", "position", name="uq_leaderboard_position"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    leaderboard_id: int = Field(foreign_key="leaderboards.id", index=True)
    student_email: str = Field(index=True)
    name: Optional[str] = None
    position: int
    credits: int

    leaderboard: "Leaderboard" = Relationship(back_populates="entries")
