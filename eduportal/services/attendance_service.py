from __future__ import annotations

import logging
from datetime import date

from sqlmodel import Session, select

from eduportal.models import AttendanceRecord, GradeRecord, UserType
from eduportal.models._common import utcnow
from .accounts import normalize_email, require_user_by_email
from .metrics import CourseAttendance, attendance_percentages

log = logging.getLogger(__name__)


def record_attendance(
    session: Session,
    *,
    teacher_email: str,
    student_email: str,
    course: str,
    day: date,
    status: str,
) -> tuple[AttendanceRecord, bool]:
    """Insert or update the record for (student, course, day).

    Returns (record, created).
    """
    student_email = normalize_email(student_email)
    require_user_by_email(session, student_email, type=UserType.STUDENT.value)
    record = session.exec(
        select(AttendanceRecord).where(
            AttendanceRecord.student_email == student_email,
            AttendanceRecord.course == course,
            AttendanceRecord.date == day,
        )
    ).first()

    created = record is None
    if created:
        record = AttendanceRecord(
            teacher_email=teacher_email,
            student_email=student_email,
            course=course,
            date=day,
            status=status,
        )
    else:
        record.status = status
        record.updated_at = utcnow()

    session.add(record)
    session.commit()
    session.refresh(record)
    log.info("Attendance %s for %s in %s on %s", "recorded" if created else "updated", student_email, course, day)
    return record, created


def attendance_for(session: Session, student_email: str) -> list[AttendanceRecord]:
    student_email = normalize_email(student_email)
    return session.exec(
        select(AttendanceRecord)
        .where(AttendanceRecord.student_email == student_email)
        .order_by(AttendanceRecord.date)
    ).all()


def performance(session: Session, student_email: str) -> tuple[dict[str, CourseAttendance], list[GradeRecord]]:
    student_email = normalize_email(student_email)
    records = attendance_for(session, student_email)
    grades = session.exec(select(GradeRecord).where(GradeRecord.student_email == student_email)).all()
    return attendance_percentages(records), grades
