from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from ._common import utcnow


class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    parent_email: str = Field(index=True)
    teacher_email: str = Field(index=True)
    sender: str
    message: str
    created_at: datetime = Field(default_factory=utcnow, index=True)

    def as_payload(self) -> dict:
        return {
            "id": self.id,
            "parent_email": self.parent_email,
            "teacher_email": self.teacher_email,
            "sender": self.sender,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
