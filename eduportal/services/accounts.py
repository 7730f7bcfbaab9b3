from __future__ import annotations

import logging

from sqlalchemy import func
from sqlmodel import Session, select

from eduportal.models import User, UserType
from eduportal.security import verify_and_update_password
from .errors import AlreadyExists, InvalidRequest, NotFound

log = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and compared trimmed and lower-cased."""
    return email.strip().lower()


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.exec(select(User).where(User.email == normalize_email(email))).first()


def next_roll_number(session: Session, department: str) -> str:
    """``<DEP><n>`` where n is one more than the students already in the department."""
    count = session.exec(
        select(func.count()).select_from(User).where(User.type == UserType.STUDENT.value, User.department == department)
    ).one()
    return f"{department[:3].upper()}{count + 1:03d}"


def register_user(
    session: Session,
    *,
    email: str,
    password: str,
    name: str,
    type: str = UserType.STUDENT.value,
    department: str | None = None,
    roll_number: str | None = None,
    subject: str | None = None,
    father_name: str | None = None,
    parent_email: str | None = None,
    parent_password: str | None = None,
) -> User:
    email = normalize_email(email)
    if type not in {t.value for t in UserType}:
        raise InvalidRequest(f"Unknown user type: {type}")
    if get_user_by_email(session, email):
        raise AlreadyExists("User already exists with this email")

    is_student = type == UserType.STUDENT.value
    if is_student and not roll_number:
        if not department:
            raise InvalidRequest("Department is required for students")
        roll_number = next_roll_number(session, department)

    user = User(
        email=email,
        name=name.strip(),
        type=type,
        department=department,
        roll_number=roll_number if is_student else None,
        subject=subject if type == UserType.TEACHER.value else None,
        father_name=father_name if is_student else None,
    )
    user.set_password(password)
    session.add(user)

    if is_student and parent_email and parent_password:
        parent_email = normalize_email(parent_email)
        if not get_user_by_email(session, parent_email):
            parent = User(
                email=parent_email,
                name=f"{father_name} (Parent)",
                type=UserType.PARENT.value,
                student_email=email,
            )
            parent.set_password(parent_password)
            session.add(parent)
            log.info("Created parent account %s for %s", parent_email, email)

    session.commit()
    session.refresh(user)
    log.info("Registered %s %s", type, email)
    return user


def authenticate(session: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(session, email)
    if not user or not user.is_active:
        return None

    valid, new_hash = verify_and_update_password(password, user.password_hash)
    if not valid:
        return None
    if new_hash:
        user.password_hash = new_hash
        session.add(user)
        session.commit()
        session.refresh(user)
        log.info("Upgraded password hash for %s", user.email)
    return user


def require_user_by_email(session: Session, email: str, *, type: str | None = None) -> User:
    user = get_user_by_email(session, email)
    if not user or (type is not None and user.type != type):
        label = type.capitalize() if type else "User"
        raise NotFound(f"{label} not found")
    return user


def users_in_department(session: Session, department: str, type: str) -> list[User]:
    return session.exec(
        select(User).where(User.type == type, User.department == department).order_by(User.name)
    ).all()


def student_for_parent(session: Session, parent_email: str) -> User:
    parent = require_user_by_email(session, parent_email, type=UserType.PARENT.value)
    if not parent.student_email:
        raise NotFound("Student not found")
    return require_user_by_email(session, parent.student_email, type=UserType.STUDENT.value)
