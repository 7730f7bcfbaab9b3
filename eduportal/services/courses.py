from __future__ import annotations

import logging

from sqlmodel import Session, select

from eduportal.models import Course, Enrollment, User, UserType
from .accounts import normalize_email, require_user_by_email, users_in_department
from .errors import AlreadyExists, NotFound
from .metrics import NotificationIntent

log = logging.getLogger(__name__)


def create_course(
    session: Session,
    *,
    teacher: User,
    course_name: str,
    department: str,
    description: str | None = None,
    duration: str | None = None,
) -> tuple[Course, list[NotificationIntent]]:
    course = Course(
        course_name=course_name.strip(),
        description=description,
        department=department,
        duration=duration or "1 semester",
        teacher_email=teacher.email,
    )
    session.add(course)
    session.commit()
    session.refresh(course)
    log.info("Course %s created in %s by %s", course.id, department, teacher.email)

    intents = [
        NotificationIntent(
            recipient=student.email,
            title="New Course Available",
            message=f'A new course "{course.course_name}" has been added to your department.',
        )
        for student in users_in_department(session, department, UserType.STUDENT.value)
    ]
    return course, intents


def get_course(session: Session, course_id: int) -> Course:
    course = session.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")
    return course


def enroll_student(session: Session, student_email: str, course_id: int) -> tuple[Enrollment, list[NotificationIntent]]:
    student = require_user_by_email(session, student_email, type=UserType.STUDENT.value)
    course = get_course(session, course_id)

    existing = session.get(Enrollment, (student.id, course.id))
    if existing:
        raise AlreadyExists("Already enrolled in this course")

    enrollment = Enrollment(user_id=student.id, course_id=course.id)
    session.add(enrollment)
    session.commit()
    session.refresh(enrollment)
    log.info("%s enrolled in course %s", student.email, course.id)

    intents = [
        NotificationIntent(
            recipient=course.teacher_email,
            title="New Student Enrollment",
            message=f'A student has enrolled in your course "{course.course_name}".',
        )
    ]
    return enrollment, intents


def enrolled_courses(session: Session, student_email: str) -> list[tuple[Course, Enrollment]]:
    return session.exec(
        select(Course, Enrollment)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .join(User, User.id == Enrollment.user_id)
        .where(User.email == normalize_email(student_email))
        .order_by(Enrollment.enrolled_at)
    ).all()


def course_students(session: Session, course_id: int) -> list[tuple[User, Enrollment]]:
    get_course(session, course_id)
    return session.exec(
        select(User, Enrollment)
        .join(Enrollment, Enrollment.user_id == User.id)
        .where(Enrollment.course_id == course_id)
        .order_by(User.name)
    ).all()
