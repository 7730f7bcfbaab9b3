from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session

from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_staff, require_user
from eduportal.models import User
from eduportal.schemas.academics import SemesterResultOut, SemesterResultsForm
from eduportal.services import results as results_service
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["results"])


@router.post("/semester-results", status_code=status.HTTP_201_CREATED)
def publish_semester_results(
    form: SemesterResultsForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    result, intents = results_service.publish_semester_results(
        session,
        teacher_email=current_user.email,
        course=form.course,
        semester=form.semester,
        results=form.results,
    )
    notifier.dispatch(intents, background)
    return {
        "ok": True,
        "message": "Semester results published successfully",
        "result": SemesterResultOut.model_validate(result),
    }


@router.get("/semester-results/{student_email}")
def student_results(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    results = results_service.results_for(session, student_email)
    return {"ok": True, "results": [SemesterResultOut.model_validate(r) for r in results]}
