from __future__ import annotations

import logging

from sqlmodel import Session, select

from eduportal.models import Complaint, User, UserType
from eduportal.models._common import utcnow
from .accounts import users_in_department
from .errors import NotFound
from .metrics import NotificationIntent, Severity

log = logging.getLogger(__name__)


def file_complaint(
    session: Session,
    *,
    student: User,
    title: str,
    description: str,
    category: str | None = None,
) -> tuple[Complaint, list[NotificationIntent]]:
    complaint = Complaint(
        student_email=student.email,
        title=title.strip(),
        description=description,
        category=category,
    )
    session.add(complaint)
    session.commit()
    session.refresh(complaint)
    log.info("Complaint %s filed by %s", complaint.id, student.email)

    if not student.department:
        return complaint, []
    intents = [
        NotificationIntent(
            recipient=teacher.email,
            title="New Complaint",
            message="A new complaint has been submitted in your department.",
            severity=Severity.WARNING,
        )
        for teacher in users_in_department(session, student.department, UserType.TEACHER.value)
    ]
    return complaint, intents


def department_complaints(session: Session, department: str) -> list[Complaint]:
    return session.exec(
        select(Complaint)
        .join(User, User.email == Complaint.student_email)
        .where(User.type == UserType.STUDENT.value, User.department == department)
        .order_by(Complaint.submitted_at.desc(), Complaint.id.desc())
    ).all()


def update_complaint_status(session: Session, complaint_id: int, status: str) -> tuple[Complaint, list[NotificationIntent]]:
    complaint = session.get(Complaint, complaint_id)
    if not complaint:
        raise NotFound("Complaint not found")

    complaint.status = status
    complaint.updated_at = utcnow()
    session.add(complaint)
    session.commit()
    session.refresh(complaint)
    log.info("Complaint %s is now %s", complaint.id, status)

    return complaint, [
        NotificationIntent(
            recipient=complaint.student_email,
            title="Complaint Status Update",
            message=f"Your complaint status has been updated to {status}.",
        )
    ]
