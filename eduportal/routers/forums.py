from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlmodel import Session

from eduportal.db import get_session
from eduportal.dependencies import get_notifier, require_user
from eduportal.models import User
from eduportal.schemas.forum import ForumPostForm, ForumPostOut, ForumReplyForm, ForumReplyOut
from eduportal.services import forums
from eduportal.services.notifier import Notifier

router = APIRouter(prefix="/api", tags=["forums"])


@router.post("/forum-posts", status_code=status.HTTP_201_CREATED)
def create_post(
    form: ForumPostForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    post, intents = forums.create_post(session, author=current_user, **form.model_dump())
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Post created successfully", "post": ForumPostOut.model_validate(post)}


@router.post("/forum-replies", status_code=status.HTTP_201_CREATED)
def create_reply(
    form: ForumReplyForm,
    background: BackgroundTasks,
    current_user: User = Depends(require_user),
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
):
    reply, intents = forums.add_reply(session, author=current_user, post_id=form.post_id, content=form.content)
    notifier.dispatch(intents, background)
    return {"ok": True, "message": "Reply posted successfully", "reply": ForumReplyOut.model_validate(reply)}


@router.get("/forum-posts/{course_id}")
def course_posts(course_id: int, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    posts = forums.course_posts(session, course_id)
    return {"ok": True, "posts": [ForumPostOut.model_validate(p) for p in posts]}
