from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session

from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_staff, require_user
from eduportal.models import User
from eduportal.schemas.requests import LeaveForm, LeaveOut, LeaveStatusForm
from eduportal.services import leave as leave_service
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["leave"])


@router.post("/leave", status_code=status.HTTP_201_CREATED)
def submit_leave(
    form: LeaveForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    request, intents = leave_service.submit_leave(session, requester=current_user, **form.model_dump())
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Leave request submitted successfully", "leave_request": LeaveOut.model_validate(request)}


@router.get("/leave-requests/{department}")
def pending_leave_requests(department: str, current_user: User = Depends(require_staff), session: Session = Depends(get_session)):
    requests = leave_service.pending_requests(session, department)
    return {"ok": True, "leave_requests": [LeaveOut.model_validate(r) for r in requests]}


@router.post("/leave-status")
def decide_leave(
    form: LeaveStatusForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    request, intents = leave_service.decide_leave(session, form.leave_id, form.status.value)
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Leave request updated successfully", "leave_request": LeaveOut.model_validate(request)}
