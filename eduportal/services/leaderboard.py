"""Monthly leaderboard publication.

A period (month, year) can be published exactly once. The leaderboard row is
inserted first and the ``(month, year)`` unique constraint decides whether
this call owns the period; only the owner goes on to write entries and
credit students.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from eduportal.models import Leaderboard, LeaderboardEntry, User, UserType
from .accounts import require_user_by_email
from .errors import AlreadyExists
from .metrics import (
    NotificationIntent,
    RankedStudent,
    StudentLike,
    assign_leaderboard_credits,
    leaderboard_notifications,
)

log = logging.getLogger(__name__)

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def claim_period(session: Session, *, month: str, year: int, teacher_email: str) -> Leaderboard:
    """Insert the leaderboard row for the period, or fail if it already exists."""
    board = Leaderboard(month=month, year=year, teacher_email=teacher_email)
    session.add(board)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        log.info("Leaderboard for %s %s already published", month, year)
        raise AlreadyExists("Leaderboard already exists for this month") from None
    return board


def credit_students(session: Session, ranked: Sequence[RankedStudent]) -> None:
    # SQL-side increment, never read-modify-write
    for student in ranked:
        session.exec(
            update(User)
            .where(User.email == student.email)
            .values(performance_credits=User.performance_credits + student.credits)
        )


def publish_leaderboard(
    session: Session,
    *,
    teacher: User,
    month: str,
    year: int,
    top_students: Sequence[StudentLike],
) -> tuple[Leaderboard, list[NotificationIntent]]:
    board = claim_period(session, month=month, year=year, teacher_email=teacher.email)
    ranked = assign_leaderboard_credits(top_students)
    for student in ranked:
        session.add(
            LeaderboardEntry(
                leaderboard_id=board.id,
                student_email=student.email,
                name=student.name,
                position=student.position,
                credits=student.credits,
            )
        )
    credit_students(session, ranked)

    try:
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(board)
    log.info("Published %s %s leaderboard with %d student(s)", month, year, len(ranked))

    peers: list[str] = []
    if teacher.department:
        peers = session.exec(
            select(User.email).where(User.type == UserType.STUDENT.value, User.department == teacher.department)
        ).all()
    return board, leaderboard_notifications(ranked, month, year, peers)


def current_leaderboard(session: Session, today: date | None = None) -> Leaderboard | None:
    today = today or date.today()
    return session.exec(
        select(Leaderboard).where(Leaderboard.month == MONTHS[today.month - 1], Leaderboard.year == today.year)
    ).first()


def leaderboard_history(session: Session) -> list[Leaderboard]:
    boards = session.exec(select(Leaderboard)).all()
    # Newest period first; month names sort by calendar position
    return sorted(
        boards,
        key=lambda b: (b.year, MONTHS.index(b.month) if b.month in MONTHS else -1),
        reverse=True,
    )


def student_credits(session: Session, student_email: str) -> int:
    student = require_user_by_email(session, student_email, type=UserType.STUDENT.value)
    return student.performance_credits or 0


def top_students(session: Session, department: str, limit: int) -> list[User]:
    return session.exec(
        select(User)
        .where(User.type == UserType.STUDENT.value, User.department == department)
        .order_by(User.performance_credits.desc(), User.name)
        .limit(limit)
    ).all()
