from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from eduportal.config import settings
from eduportal.db import get_session
from eduportal.dependencies import get_current_user, require_user
from eduportal.models import User, UserType
from eduportal.schemas.auth import LoginForm, RegisterForm, UserPublic
from eduportal.security import create_access_token
from eduportal.services import accounts
from eduportal.services.errors import PermissionDenied, Unauthorized

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    form: RegisterForm,
    current_user: Optional[User] = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if form.type == UserType.ADMIN.value and (not current_user or current_user.type != UserType.ADMIN.value):
        raise PermissionDenied("Only an admin can register another admin")
    user = accounts.register_user(session, **form.model_dump())
    return {"ok": True, "message": "Registration successful", "user": UserPublic.model_validate(user)}


@router.post("/login")
def login(form: LoginForm, response: Response, session: Session = Depends(get_session)):
    user = accounts.authenticate(session, form.email, form.password)
    if not user:
        raise Unauthorized("Invalid email or password")

    token = create_access_token({"sub": str(user.id)})
    response.set_cookie(settings.AUTH_COOKIE_NAME, token, httponly=True, samesite="lax")
    return {
        "ok": True,
        "access_token": token,
        "token_type": "bearer",
        "user": UserPublic.model_validate(user),
    }


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return {"ok": True}


@router.get("/profile/{email}")
def profile(email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    user = accounts.require_user_by_email(session, email)
    return {"ok": True, "user": UserPublic.model_validate(user)}


@router.get("/students/{department}")
def department_students(department: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    students = accounts.users_in_department(session, department, UserType.STUDENT.value)
    return {"ok": True, "students": [UserPublic.model_validate(s) for s in students]}


@router.get("/teachers/{department}")
def department_teachers(department: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    teachers = accounts.users_in_department(session, department, UserType.TEACHER.value)
    return {"ok": True, "teachers": [UserPublic.model_validate(t) for t in teachers]}


@router.get("/parent-student/{parent_email}")
def parent_student(parent_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    student = accounts.student_for_parent(session, parent_email)
    return {"ok": True, "student": UserPublic.model_validate(student)}
