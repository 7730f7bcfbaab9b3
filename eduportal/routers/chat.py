import json
import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from eduportal.db import get_session, get_session_factory
from eduportal.dependencies import require_user, user_from_token
from eduportal.models import User, UserType
from eduportal.services import chat as chat_service
from eduportal.services.accounts import normalize_email
from eduportal.services.metrics import NotificationIntent
from eduportal.services.notifier import Notifier, push_notifications
from eduportal.services.realtime import chat_room, hub

log = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

SessionFactory = Callable[[], Session]


@router.get("/api/chat-messages/{parent_email}/{teacher_email}")
def chat_messages(
    parent_email: str,
    teacher_email: str,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
):
    messages = chat_service.conversation(session, parent_email, teacher_email)
    return {"ok": True, "messages": [m.as_payload() for m in messages]}


# Blocking database work for the websocket; each call gets its own short-lived
# session and runs in the threadpool.

def _load_user(sessions: SessionFactory, token: Optional[str]) -> Optional[User]:
    with sessions() as session:
        return user_from_token(session, token)


def _save_message(sessions: SessionFactory, **fields) -> dict:
    with sessions() as session:
        return chat_service.save_message(session, **fields).as_payload()


def _store_notifications(sessions: SessionFactory, intents: list[NotificationIntent]) -> list[dict]:
    with sessions() as session:
        return Notifier(session).store(intents)


def _email(data: dict, key: str) -> str:
    value = data.get(key)
    return normalize_email(value) if isinstance(value, str) else ""


def _chat_pair(user: User, data: dict) -> Optional[tuple[str, str]]:
    parent_email = _email(data, "parent_email")
    teacher_email = _email(data, "teacher_email")
    if not parent_email or not teacher_email or user.email not in (parent_email, teacher_email):
        return None
    return parent_email, teacher_email


async def _join_chat(websocket: WebSocket, user: User, data: dict, sessions: SessionFactory) -> None:
    pair = _chat_pair(user, data)
    if not pair:
        await websocket.send_json({"event": "error", "data": {"error": "Not a member of this chat"}})
        return
    room = chat_room(*pair)
    hub.join(websocket, room)
    await websocket.send_json({"event": "joined-chat", "data": {"room": room}})


async def _send_chat_message(websocket: WebSocket, user: User, data: dict, sessions: SessionFactory) -> None:
    pair = _chat_pair(user, data)
    text = data.get("message")
    text = text.strip() if isinstance(text, str) else ""
    if not pair or not text:
        await websocket.send_json({"event": "error", "data": {"error": "Chat pair and message are required"}})
        return
    parent_email, teacher_email = pair
    payload = await run_in_threadpool(
        _save_message,
        sessions,
        parent_email=parent_email,
        teacher_email=teacher_email,
        sender=user.email,
        message=text,
    )
    await hub.emit(chat_room(parent_email, teacher_email), "new-chat-message", payload)


def _presence(event: str):
    async def handler(websocket: WebSocket, user: User, data: dict, sessions: SessionFactory) -> None:
        await hub.broadcast(event, {"email": user.email, "name": user.name}, exclude=websocket)
    return handler


async def _meeting_invitation(websocket: WebSocket, user: User, data: dict, sessions: SessionFactory) -> None:
    student_email = _email(data, "student_email")
    if user.type not in (UserType.TEACHER.value, UserType.ADMIN.value) or not student_email:
        await websocket.send_json({"event": "error", "data": {"error": "Only staff can invite a student"}})
        return
    course = data.get("course") or ""
    await hub.emit(
        student_email,
        "meeting-invitation",
        {**data, "student_email": student_email, "teacher": user.name, "teacher_email": user.email},
    )

    intents = [
        NotificationIntent(
            recipient=student_email,
            title="Live Meeting Invitation",
            message=f"You have been invited to a live meeting for {course} by {user.name}.",
        )
    ]
    payloads = await run_in_threadpool(_store_notifications, sessions, intents)
    await push_notifications(hub, payloads)


HANDLERS = {
    "join-chat": _join_chat,
    "send-chat-message": _send_chat_message,
    "user-online": _presence("user-online"),
    "user-offline": _presence("user-offline"),
    "meeting-invitation": _meeting_invitation,
}


@router.websocket("/ws")
async def realtime(
    websocket: WebSocket,
    token: Optional[str] = None,
    sessions: SessionFactory = Depends(get_session_factory),
):
    user = await run_in_threadpool(_load_user, sessions, token)
    if not user:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await hub.connect(websocket, user.email)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json({"event": "error", "data": {"error": "Invalid JSON"}})
                continue

            event = payload.get("event") if isinstance(payload, dict) else None
            handler = HANDLERS.get(event)
            if handler is None:
                await websocket.send_json({"event": "error", "data": {"error": f"Unknown event: {event}"}})
                continue
            data = payload.get("data")
            await handler(websocket, user, data if isinstance(data, dict) else {}, sessions)
    except WebSocketDisconnect:
        log.info("Websocket for %s disconnected", user.email)
    finally:
        hub.disconnect(websocket)
