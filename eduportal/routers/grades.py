from fastapi import APIRouter, BackgroundTasks, Depends
from sqlmodel import Session

from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_staff, require_user
from eduportal.models import User
from eduportal.schemas.academics import GradeForm, GradeOut
from eduportal.services import grading
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["grades"])


@router.post("/grades")
def record_grade(
    form: GradeForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    record, created, intents = grading.record_grade(
        session,
        teacher_email=current_user.email,
        student_email=form.student_email,
        course=form.course,
        letter_grade=form.grade,
        semester=form.semester,
        assignment_id=form.assignment_id,
    )
    notifier.dispatch(intents, background)
    message = "Grade uploaded successfully" if created else "Grade updated successfully"
    return {"ok": True, "message": message, "grade": GradeOut.model_validate(record)}


@router.get("/grades/{student_email}")
def student_grades(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    return {"ok": True, "grades": [GradeOut.model_validate(g) for g in grading.grades_for(session, student_email)]}


@router.get("/overall-grades/{student_email}")
def overall_grades(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    summary = grading.overall_grades(session, student_email)
    return {
        "ok": True,
        "overall_grades": {
            course: {"grades": course_grades.points, "average": course_grades.average}
            for course, course_grades in summary.items()
        },
    }
