from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session

from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_staff, require_student
from eduportal.models import User
from eduportal.schemas.requests import ComplaintForm, ComplaintOut, ComplaintStatusForm
from eduportal.services import complaints
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["complaints"])


@router.post("/complaint", status_code=status.HTTP_201_CREATED)
def file_complaint(
    form: ComplaintForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_student),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    complaint, intents = complaints.file_complaint(session, student=current_user, **form.model_dump())
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Complaint submitted successfully", "complaint": ComplaintOut.model_validate(complaint)}


@router.get("/complaints/{department}")
def department_complaints(department: str, current_user: User = Depends(require_staff), session: Session = Depends(get_session)):
    rows = complaints.department_complaints(session, department)
    return {"ok": True, "complaints": [ComplaintOut.model_validate(c) for c in rows]}


@router.post("/complaint-status")
def update_complaint_status(
    form: ComplaintStatusForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    complaint, intents = complaints.update_complaint_status(session, form.complaint_id, form.status.value)
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Complaint status updated successfully", "complaint": ComplaintOut.model_validate(complaint)}
