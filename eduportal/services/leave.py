"""Leave requests: submitted by anyone, decided by staff of the student's department."""
from __future__ import annotations

import logging
from datetime import date

from sqlmodel import Session, select

from eduportal.models import LeaveRequest, LeaveStatus, User, UserType
from eduportal.models._common import utcnow
from .accounts import users_in_department
from .errors import InvalidRequest, NotFound
from .metrics import NotificationIntent, Severity

log = logging.getLogger(__name__)


def submit_leave(
    session: Session,
    *,
    requester: User,
    start_date: date,
    end_date: date,
    reason: str,
) -> tuple[LeaveRequest, list[NotificationIntent]]:
    if end_date < start_date:
        raise InvalidRequest("End date cannot be before start date")

    request = LeaveRequest(
        user_email=requester.email,
        requester_type=requester.type,
        start_date=start_date,
        end_date=end_date,
        reason=reason.strip(),
    )
    session.add(request)
    session.commit()
    session.refresh(request)
    log.info("Leave request %s submitted by %s", request.id, requester.email)

    # Only student requests are routed to the department's teachers
    if requester.type != UserType.STUDENT.value or not requester.department:
        return request, []
    intents = [
        NotificationIntent(
            recipient=teacher.email,
            title="New Leave Request",
            message="A student has submitted a leave request.",
        )
        for teacher in users_in_department(session, requester.department, UserType.TEACHER.value)
    ]
    return request, intents


def pending_requests(session: Session, department: str) -> list[LeaveRequest]:
    return session.exec(
        select(LeaveRequest)
        .join(User, User.email == LeaveRequest.user_email)
        .where(
            User.type == UserType.STUDENT.value,
            User.department == department,
            LeaveRequest.status == LeaveStatus.PENDING.value,
        )
        .order_by(LeaveRequest.submitted_at, LeaveRequest.id)
    ).all()


def decide_leave(session: Session, leave_id: int, status: str) -> tuple[LeaveRequest, list[NotificationIntent]]:
    if status not in (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value):
        raise InvalidRequest("Status must be approved or rejected")
    request = session.get(LeaveRequest, leave_id)
    if not request:
        raise NotFound("Leave request not found")

    request.status = status
    request.processed_at = utcnow()
    session.add(request)
    session.commit()
    session.refresh(request)
    log.info("Leave request %s %s", request.id, status)

    intent = NotificationIntent(
        recipient=request.user_email,
        title="Leave Request Update",
        message=f"Your leave request has been {status}.",
        severity=Severity.SUCCESS if status == LeaveStatus.APPROVED.value else Severity.WARNING,
    )
    return request, [intent]
