from functools import partial
from typing import Callable

from sqlmodel import Session, SQLModel, create_engine

from .config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Sessions are handed across FastAPI's threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, connect_args=connect_args)


def init_db() -> None:
    # Import so every table is registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session


def get_session_factory() -> Callable[[], Session]:
    """For long-lived handlers (websockets) that open one session per unit of work."""
    return partial(Session, engine)
