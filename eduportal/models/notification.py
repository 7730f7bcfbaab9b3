from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from ._common import utcnow


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_email: str = Field(index=True)
    title: str
    message: str
    type: str = "info"  # info|success|warning
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow, index=True)

    def as_payload(self) -> dict:
        return {
            "id": self.id,
            "user_email": self.user_email,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "read": self.read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
