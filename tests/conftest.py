from functools import partial

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
from sqlmodel import Session, SQLModel

from eduportal.main import app
from eduportal.db import get_session, get_session_factory
from eduportal.models import User
from tests.util import engine


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="ws_client")
def ws_client_fixture(session: Session, monkeypatch):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_session_factory] = lambda: partial(Session, engine)
    # Startup must create tables on the test engine, not the configured database
    monkeypatch.setattr("eduportal.main.init_db", lambda: SQLModel.metadata.create_all(engine))

    # Entering the client shares one event loop between requests and websockets
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session):
    def make_user(email, type="student", department="Computer Science", name=None, password="password", **extra):
        user = User(
            email=email,
            name=name or email.split("@")[0].title(),
            type=type,
            department=department,
            **extra,
        )
        user.set_password(password)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return make_user
