from __future__ import annotations

from sqlalchemy import and_, or_
from sqlmodel import Session, select

from eduportal.models import ChatMessage
from .accounts import normalize_email


def save_message(session: Session, *, parent_email: str, teacher_email: str, sender: str, message: str) -> ChatMessage:
    row = ChatMessage(parent_email=parent_email, teacher_email=teacher_email, sender=sender, message=message)
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def conversation(session: Session, parent_email: str, teacher_email: str) -> list[ChatMessage]:
    """Messages between the two users in either direction, oldest first."""
    parent_email, teacher_email = normalize_email(parent_email), normalize_email(teacher_email)
    return session.exec(
        select(ChatMessage)
        .where(
            or_(
                and_(ChatMessage.parent_email == parent_email, ChatMessage.teacher_email == teacher_email),
                and_(ChatMessage.parent_email == teacher_email, ChatMessage.teacher_email == parent_email),
            )
        )
        .order_by(ChatMessage.created_at, ChatMessage.id)
    ).all()
