from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session, select

from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_staff, require_user
from eduportal.models import Course, User, UserType
from eduportal.schemas.auth import UserPublic
from eduportal.schemas.course import CourseForm, CourseOut, EnrollForm
from eduportal.services import courses as course_service
from eduportal.services.errors import PermissionDenied
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["courses"])


@router.post("/courses", status_code=status.HTTP_201_CREATED)
def create_course(
    form: CourseForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    course, intents = course_service.create_course(session, teacher=current_user, **form.model_dump())
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Course created successfully", "course": CourseOut.model_validate(course)}


@router.get("/courses/{department}")
def department_courses(department: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    courses = session.exec(select(Course).where(Course.department == department).order_by(Course.created_at)).all()
    return {"ok": True, "courses": [CourseOut.model_validate(c) for c in courses]}


@router.get("/all-courses")
def all_courses(current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    courses = session.exec(select(Course).order_by(Course.created_at)).all()
    return {"ok": True, "courses": [CourseOut.model_validate(c) for c in courses]}


@router.post("/enroll")
def enroll(
    form: EnrollForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    if current_user.type == UserType.STUDENT.value and current_user.email != form.student_email:
        raise PermissionDenied("Students can only enroll themselves")
    if current_user.type == UserType.PARENT.value:
        raise PermissionDenied("Parents cannot enroll students")

    _, intents = course_service.enroll_student(session, form.student_email, form.course_id)
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Enrolled successfully"}


@router.get("/enrolled-courses/{student_email}")
def enrolled_courses(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    rows = course_service.enrolled_courses(session, student_email)
    return {
        "ok": True,
        "courses": [
            {**CourseOut.model_validate(course).model_dump(), "enrolled_at": enrollment.enrolled_at}
            for course, enrollment in rows
        ],
    }


@router.get("/course-students/{course_id}")
def course_students(course_id: int, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    rows = course_service.course_students(session, course_id)
    return {
        "ok": True,
        "students": [
            {**UserPublic.model_validate(student).model_dump(), "enrolled_at": enrollment.enrolled_at}
            for student, enrollment in rows
        ],
    }
