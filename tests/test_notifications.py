import pytest
from httpx import AsyncClient
from sqlmodel import Session

from eduportal.models import Notification
from eduportal.services.metrics import NotificationIntent, Severity
from eduportal.services.notifier import Notifier
from eduportal.services.realtime import RoomManager
from tests.util import auth_headers


class RecordingHub(RoomManager):
    def __init__(self):
        super().__init__()
        self.sent = []

    async def emit(self, room, event, data):
        self.sent.append((room, event, data))


@pytest.mark.asyncio
async def test_notifier_stores_then_pushes(session: Session):
    hub = RecordingHub()
    notifier = Notifier(session, hub=hub)

    payloads = notifier.store([
        NotificationIntent("a@school.test", "Hi", "First"),
        NotificationIntent("b@school.test", "Yay", "Second", Severity.SUCCESS),
    ])
    assert [p["type"] for p in payloads] == ["info", "success"]
    assert all(p["id"] for p in payloads)
    assert hub.sent == []

    await notifier.push(payloads)
    assert [(room, event) for room, event, _ in hub.sent] == [
        ("a@school.test", "notification"),
        ("b@school.test", "notification"),
    ]


def test_notifier_store_nothing(session: Session):
    assert Notifier(session).store([]) == []


@pytest.mark.asyncio
async def test_list_and_mark_read(session: Session, client: AsyncClient, make_user):
    kid = make_user("kid@school.test")
    other = make_user("other@school.test")
    older = Notification(user_email="kid@school.test", title="Old", message="old")
    newer = Notification(user_email="kid@school.test", title="New", message="new")
    session.add(older)
    session.commit()
    session.add(newer)
    session.commit()

    listing = await client.get("/api/notifications/kid@school.test", headers=auth_headers(kid))
    assert [n["title"] for n in listing.json()["notifications"]] == ["New", "Old"]

    forbidden = await client.post(
        "/api/notifications/mark-read",
        json={"notification_id": older.id},
        headers=auth_headers(other),
    )
    assert forbidden.status_code == 403

    response = await client.post(
        "/api/notifications/mark-read",
        json={"notification_id": older.id},
        headers=auth_headers(kid),
    )
    assert response.json() == {"ok": True, "message": "Notification marked as read"}
    session.refresh(older)
    assert older.read is True

    missing = await client.post("/api/notifications/mark-read", json={"notification_id": 9999}, headers=auth_headers(kid))
    assert missing.status_code == 404
