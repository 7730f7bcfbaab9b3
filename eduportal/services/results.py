from __future__ import annotations

import logging
from typing import Iterable, Protocol

from sqlmodel import Session, select

from eduportal.models import SemesterResult, SemesterResultLine
from .accounts import normalize_email
from .metrics import NotificationIntent

log = logging.getLogger(__name__)


class ResultLike(Protocol):
    student_email: str
    grade: str | None
    marks: float | None
    remarks: str | None


def publish_semester_results(
    session: Session,
    *,
    teacher_email: str,
    course: str,
    semester: str,
    results: Iterable[ResultLike],
) -> tuple[SemesterResult, list[NotificationIntent]]:
    result = SemesterResult(teacher_email=teacher_email, course=course, semester=semester)
    session.add(result)
    session.flush()

    lines = [
        SemesterResultLine(
            result_id=result.id,
            student_email=normalize_email(line.student_email),
            grade=line.grade,
            marks=line.marks,
            remarks=line.remarks,
        )
        for line in results
    ]
    session.add_all(lines)
    session.commit()
    session.refresh(result)
    log.info("Published %s %s results for %d student(s)", course, semester, len(lines))

    intents = [
        NotificationIntent(
            recipient=line.student_email,
            title="Semester Results Published",
            message=f"The results for {course} - {semester} have been published. Check your results section.",
        )
        for line in lines
    ]
    return result, intents


def results_for(session: Session, student_email: str) -> list[SemesterResult]:
    return session.exec(
        select(SemesterResult)
        .join(SemesterResultLine, SemesterResultLine.result_id == SemesterResult.id)
        .where(SemesterResultLine.student_email == normalize_email(student_email))
        .order_by(SemesterResult.published_at.desc())
        .distinct()
    ).all()
