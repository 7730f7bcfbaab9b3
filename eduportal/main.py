import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import configure_logging, settings
from .db import init_db
from .routers import (
    attendance, auth, chat, chatbot, complaints, courses, forums, grades, leaderboard, leave, notifications, results,
)
from .services.errors import DomainError

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    log.info("%s started", settings.APP_NAME)
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse({"ok": False, "error": exc.message}, status_code=exc.status_code)

    app.include_router(auth.router)
    app.include_router(courses.router)
    app.include_router(attendance.router)
    app.include_router(grades.router)
    app.include_router(leaderboard.router)
    app.include_router(results.router)
    app.include_router(notifications.router)
    app.include_router(forums.router)
    app.include_router(leave.router)
    app.include_router(complaints.router)
    app.include_router(chatbot.router)
    app.include_router(chat.router)

    @app.get("/api/health")
    def health():
        return {"ok": True, "app": settings.APP_NAME}

    return app


app = create_app()
