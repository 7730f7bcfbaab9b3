from __future__ import annotations

import logging
from typing import Iterable

from fastapi import BackgroundTasks
from sqlmodel import Session

from eduportal.models import Notification
from .metrics import NotificationIntent, Severity
from .realtime import RoomManager, hub as default_hub

log = logging.getLogger(__name__)


class Notifier:
    """Stores notifications and pushes them to each recipient's room."""

    def __init__(self, session: Session, hub: RoomManager = default_hub):
        self.session = session
        self.hub = hub

    def store(self, intents: Iterable[NotificationIntent]) -> list[dict]:
        rows = [
            Notification(
                user_email=intent.recipient,
                title=intent.title,
                message=intent.message,
                type=Severity(intent.severity).value,
            )
            for intent in intents
        ]
        if not rows:
            return []

        self.session.add_all(rows)
        self.session.commit()
        for row in rows:
            self.session.refresh(row)
        log.info("Stored %d notification(s)", len(rows))
        return [row.as_payload() for row in rows]

    def dispatch(self, intents: Iterable[NotificationIntent], background: BackgroundTasks) -> list[dict]:
        """Store now, deliver after the response has been sent."""
        payloads = self.store(intents)
        if payloads:
            background.add_task(self.push, payloads)
        return payloads

    async def push(self, payloads: list[dict]) -> None:
        await push_notifications(self.hub, payloads)


async def push_notifications(hub: RoomManager, payloads: list[dict]) -> None:
    await hub.emit_many("notification", [(payload["user_email"], payload) for payload in payloads])
