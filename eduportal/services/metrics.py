"""Academic metrics: grade points, attendance percentages and leaderboard credits.

Everything here is a pure function over in-memory records. Nothing touches the
database or the realtime channel; callers pass in already-fetched rows and
carry out any writes or notifications themselves.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol, Sequence


# Ordered highest first; point_to_letter walks this list top-down.
GRADE_SCALE: tuple[tuple[str, float], ...] = (
    ("A+", 4.3),
    ("A", 4.0),
    ("A-", 3.7),
    ("B+", 3.3),
    ("B", 3.0),
    ("B-", 2.7),
    ("C+", 2.3),
    ("C", 2.0),
    ("C-", 1.7),
    ("D", 1.0),
    ("F", 0.0),
)

GRADE_POINTS: dict[str, float] = dict(GRADE_SCALE)

PRESENT = "present"

FIRST_PLACE_CREDITS = 100
CREDIT_STEP = 20


class GradeLike(Protocol):
    course: str
    letter_grade: str


class AttendanceLike(Protocol):
    course: str
    status: str


class StudentLike(Protocol):
    email: str
    name: str | None


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass
class CourseGrades:
    points: list[float] = field(default_factory=list)
    average: str = "F"


@dataclass
class CourseAttendance:
    present: int = 0
    total: int = 0
    percentage: float = 0.0


@dataclass(frozen=True)
class RankedStudent:
    email: str
    name: str | None
    position: int
    credits: int


@dataclass(frozen=True)
class NotificationIntent:
    recipient: str
    title: str
    message: str
    severity: Severity = Severity.INFO


def letter_to_point(letter: str) -> float:
    """Grade point for a letter grade.

    Unknown letters are worth 0.0, the same as an F. This is deliberate: a
    mistyped grade lowers an average instead of failing the whole request.
    """
    return GRADE_POINTS.get(letter, 0.0)


def point_to_letter(point: float) -> str:
    """Highest letter whose threshold is <= ``point``. Below 1.0 is an F."""
    for letter, threshold in GRADE_SCALE:
        if point >= threshold:
            return letter
    return "F"


def aggregate_course_grades(records: Iterable[GradeLike]) -> dict[str, CourseGrades]:
    """Average a student's grades per course.

    Grades are grouped by course only. Different semesters and assignments of
    the same course are averaged together.
    """
    summary: dict[str, CourseGrades] = {}
    for record in records:
        summary.setdefault(record.course, CourseGrades()).points.append(letter_to_point(record.letter_grade))

    for course_grades in summary.values():
        mean = sum(course_grades.points) / len(course_grades.points)
        course_grades.average = point_to_letter(mean)
    return summary


def attendance_percentages(records: Iterable[AttendanceLike]) -> dict[str, CourseAttendance]:
    """Per-course attendance as present / total * 100, unrounded.

    Any status other than exactly ``"present"`` counts as an absence.
    """
    summary: dict[str, CourseAttendance] = {}
    for record in records:
        course_attendance = summary.setdefault(record.course, CourseAttendance())
        course_attendance.total += 1
        if record.status == PRESENT:
            course_attendance.present += 1

    for course_attendance in summary.values():
        course_attendance.percentage = course_attendance.present / course_attendance.total * 100
    return summary


def credits_for_index(index: int) -> int:
    # No floor: the 7th place and below earn negative credits
    return FIRST_PLACE_CREDITS - index * CREDIT_STEP


def assign_leaderboard_credits(top_students: Sequence[StudentLike]) -> list[RankedStudent]:
    """Rank students in the given order and attach their credits.

    The input order is trusted as the ranking; there is no tie handling.
    """
    return [
        RankedStudent(
            email=student.email,
            name=student.name,
            position=index + 1,
            credits=credits_for_index(index),
        )
        for index, student in enumerate(top_students)
    ]


def leaderboard_notifications(
    ranked: Sequence[RankedStudent],
    month: str,
    year: int,
    department_students: Iterable[str],
) -> list[NotificationIntent]:
    """Notifications produced by publishing a leaderboard.

    Ranked students get a congratulation; every other student in the
    publishing teacher's department is told the board is out.
    """
    intents = [
        NotificationIntent(
            recipient=student.email,
            title="🏆 Leaderboard Achievement!",
            message=(
                f"Congratulations! You ranked #{student.position} in the {month} {year} "
                f"leaderboard and earned {student.credits} performance credits!"
            ),
            severity=Severity.SUCCESS,
        )
        for student in ranked
    ]

    listed = {student.email for student in ranked}
    for email in department_students:
        if email in listed:
            continue
        intents.append(
            NotificationIntent(
                recipient=email,
                title="New Leaderboard Published",
                message=f"The {month} {year} leaderboard has been published. Check it out in your dashboard!",
            )
        )
    return intents
