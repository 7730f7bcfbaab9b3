from sqlmodel import create_engine
from sqlmodel.pool import StaticPool

from eduportal.models import User
from eduportal.security import create_access_token

# One in-memory database shared by the test session, request threads and websocket sessions
engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def token_for(user: User) -> str:
    return create_access_token({"sub": str(user.id)})


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}
