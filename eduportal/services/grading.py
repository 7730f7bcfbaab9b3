from __future__ import annotations

import logging

from sqlmodel import Session, select

from eduportal.models import GradeRecord, UserType
from eduportal.models._common import utcnow
from .accounts import normalize_email, require_user_by_email
from .metrics import CourseGrades, NotificationIntent, aggregate_course_grades

log = logging.getLogger(__name__)


def record_grade(
    session: Session,
    *,
    teacher_email: str,
    student_email: str,
    course: str,
    letter_grade: str,
    semester: str,
    assignment_id: str = "",
) -> tuple[GradeRecord, bool, list[NotificationIntent]]:
    """Insert or update the grade for (student, course, semester, assignment).

    Letters outside the grade scale are stored as given; they count as 0.0
    when averaged.
    """
    student_email = normalize_email(student_email)
    require_user_by_email(session, student_email, type=UserType.STUDENT.value)
    record = session.exec(
        select(GradeRecord).where(
            GradeRecord.student_email == student_email,
            GradeRecord.course == course,
            GradeRecord.semester == semester,
            GradeRecord.assignment_id == assignment_id,
        )
    ).first()

    created = record is None
    if created:
        record = GradeRecord(
            teacher_email=teacher_email,
            student_email=student_email,
            course=course,
            semester=semester,
            assignment_id=assignment_id,
            letter_grade=letter_grade,
        )
        intent = NotificationIntent(
            recipient=student_email,
            title="New Grade Available",
            message=f"You have received a grade for {course}: {letter_grade}.",
        )
    else:
        record.letter_grade = letter_grade
        record.updated_at = utcnow()
        intent = NotificationIntent(
            recipient=student_email,
            title="Grade Updated",
            message=f"Your grade for {course} has been updated to {letter_grade}.",
        )

    session.add(record)
    session.commit()
    session.refresh(record)
    log.info("Grade %s for %s in %s", "uploaded" if created else "updated", student_email, course)
    return record, created, [intent]


def grades_for(session: Session, student_email: str) -> list[GradeRecord]:
    student_email = normalize_email(student_email)
    return session.exec(
        select(GradeRecord).where(GradeRecord.student_email == student_email).order_by(GradeRecord.id)
    ).all()


def overall_grades(session: Session, student_email: str) -> dict[str, CourseGrades]:
    return aggregate_course_grades(grades_for(session, student_email))
