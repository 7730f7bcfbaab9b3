import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect
from sqlmodel import Session, select

from eduportal.db import get_session_factory
from eduportal.main import app
from eduportal.models import ChatMessage, Notification
from tests.util import auth_headers, engine, token_for


def test_websocket_requires_token(ws_client: TestClient):
    with pytest.raises(WebSocketDisconnect):
        with ws_client.websocket_connect("/ws?token=garbage"):
            pass


def test_chat_round_trip(session: Session, ws_client: TestClient, make_user):
    parent = make_user("mum@home.test", type="parent", department=None)
    make_user("prof@school.test", type="teacher")
    pair = {"parent_email": "mum@home.test", "teacher_email": "prof@school.test"}

    with ws_client.websocket_connect(f"/ws?token={token_for(parent)}") as ws:
        ws.send_json({"event": "join-chat", "data": pair})
        assert ws.receive_json() == {"event": "joined-chat", "data": {"room": "chat-mum@home.test-prof@school.test"}}

        ws.send_json({"event": "send-chat-message", "data": {**pair, "message": "How is Sam doing?"}})
        reply = ws.receive_json()
        assert reply["event"] == "new-chat-message"
        assert reply["data"]["sender"] == "mum@home.test"
        assert reply["data"]["message"] == "How is Sam doing?"

    stored = session.exec(select(ChatMessage)).all()
    assert [m.message for m in stored] == ["How is Sam doing?"]

    history = ws_client.get("/api/chat-messages/prof@school.test/mum@home.test", headers=auth_headers(parent))
    assert [m["message"] for m in history.json()["messages"]] == ["How is Sam doing?"]


def test_cannot_join_someone_elses_chat(ws_client: TestClient, make_user):
    stranger = make_user("stranger@school.test")

    with ws_client.websocket_connect(f"/ws?token={token_for(stranger)}") as ws:
        ws.send_json({"event": "join-chat", "data": {"parent_email": "mum@home.test", "teacher_email": "prof@school.test"}})
        assert ws.receive_json()["event"] == "error"


def test_unknown_event_and_bad_json(ws_client: TestClient, make_user):
    kid = make_user("kid@school.test")

    with ws_client.websocket_connect(f"/ws?token={token_for(kid)}") as ws:
        ws.send_json({"event": "dance"})
        assert ws.receive_json() == {"event": "error", "data": {"error": "Unknown event: dance"}}

        ws.send_text("{not json")
        assert ws.receive_json() == {"event": "error", "data": {"error": "Invalid JSON"}}


def test_meeting_invitation_reaches_student(session: Session, ws_client: TestClient, make_user):
    teacher = make_user("prof@school.test", type="teacher", name="Prof")
    kid = make_user("kid@school.test")

    with ws_client.websocket_connect(f"/ws?token={token_for(kid)}") as student_ws:
        with ws_client.websocket_connect(f"/ws?token={token_for(teacher)}") as teacher_ws:
            teacher_ws.send_json({"event": "meeting-invitation", "data": {"student_email": "kid@school.test", "course": "Math"}})

            invitation = student_ws.receive_json()
            assert invitation["event"] == "meeting-invitation"
            assert invitation["data"]["teacher"] == "Prof"

            notification = student_ws.receive_json()
            assert notification["event"] == "notification"
            assert notification["data"]["title"] == "Live Meeting Invitation"

    stored = session.exec(select(Notification)).all()
    assert [n.user_email for n in stored] == ["kid@school.test"]


def test_presence_is_broadcast_to_others(ws_client: TestClient, make_user):
    kid = make_user("kid@school.test", name="Kid")
    pal = make_user("pal@school.test")

    with ws_client.websocket_connect(f"/ws?token={token_for(pal)}") as pal_ws:
        with ws_client.websocket_connect(f"/ws?token={token_for(kid)}") as kid_ws:
            kid_ws.send_json({"event": "user-online"})
            assert pal_ws.receive_json() == {"event": "user-online", "data": {"email": "kid@school.test", "name": "Kid"}}


def test_websocket_events_use_short_lived_sessions(session: Session, ws_client: TestClient, make_user):
    parent = make_user("mum@home.test", type="parent", department=None)
    make_user("prof@school.test", type="teacher")
    pair = {"parent_email": "Mum@Home.test", "teacher_email": "prof@school.test"}

    opened = []

    def open_session():
        opened.append(Session(engine))
        return opened[-1]

    app.dependency_overrides[get_session_factory] = lambda: open_session

    with ws_client.websocket_connect(f"/ws?token={token_for(parent)}") as ws:
        ws.send_json({"event": "join-chat", "data": pair})
        assert ws.receive_json()["data"] == {"room": "chat-mum@home.test-prof@school.test"}

        for text in ("First", "Second"):
            ws.send_json({"event": "send-chat-message", "data": {**pair, "message": text}})
            assert ws.receive_json()["data"]["message"] == text

    # One for the token lookup, one per stored message
    assert len(opened) == 3
    stored = session.exec(select(ChatMessage).order_by(ChatMessage.id)).all()
    assert [(m.parent_email, m.message) for m in stored] == [("mum@home.test", "First"), ("mum@home.test", "Second")]
