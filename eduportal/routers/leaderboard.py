from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session

from eduportal.config import settings
from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_staff, require_user
from eduportal.models import User
from eduportal.schemas.auth import UserPublic
from eduportal.schemas.leaderboard import LeaderboardForm, LeaderboardOut
from eduportal.services import leaderboard as leaderboard_service
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.post("/leaderboard", status_code=status.HTTP_201_CREATED)
def publish_leaderboard(
    form: LeaderboardForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    board, intents = leaderboard_service.publish_leaderboard(
        session,
        teacher=current_user,
        month=form.month,
        year=form.year,
        top_students=form.top_students,
    )
    notifier.dispatch(intents, background)
    return {
        "ok": True,
        "message": "Leaderboard published successfully",
        "leaderboard": LeaderboardOut.model_validate(board),
    }


@router.get("/leaderboard/current")
def current_leaderboard(current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    board = leaderboard_service.current_leaderboard(session)
    return {"ok": True, "leaderboard": LeaderboardOut.model_validate(board) if board else None}


@router.get("/leaderboard/history")
def leaderboard_history(current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    boards = leaderboard_service.leaderboard_history(session)
    return {"ok": True, "leaderboards": [LeaderboardOut.model_validate(b) for b in boards]}


@router.get("/student/credits/{student_email}")
def student_credits(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    return {"ok": True, "credits": leaderboard_service.student_credits(session, student_email)}


@router.get("/top-students/{department}")
def top_students(department: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    students = leaderboard_service.top_students(session, department, settings.TOP_STUDENTS_LIMIT)
    return {"ok": True, "students": [UserPublic.model_validate(s) for s in students]}
