from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from eduportal.db import get_session
from eduportal.dependencies import require_user
from eduportal.models import Notification, User
from eduportal.schemas.notification import MarkReadForm
from eduportal.services.accounts import normalize_email
from eduportal.services.errors import NotFound, PermissionDenied

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/{user_email}")
def list_notifications(user_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    rows = session.exec(
        select(Notification)
        .where(Notification.user_email == normalize_email(user_email))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    ).all()
    return {"ok": True, "notifications": [row.as_payload() for row in rows]}


@router.post("/mark-read")
def mark_read(form: MarkReadForm, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    notification = session.get(Notification, form.notification_id)
    if not notification:
        raise NotFound("Notification not found")
    if notification.user_email != current_user.email:
        raise PermissionDenied("Permission denied")

    notification.read = True
    session.add(notification)
    session.commit()
    return {"ok": True, "message": "Notification marked as read"}
