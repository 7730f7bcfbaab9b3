from __future__ import annotations

import logging

from sqlmodel import Session, select

from eduportal.models import ForumPost, ForumReply, User
from .courses import course_students, get_course
from .errors import NotFound
from .metrics import NotificationIntent

log = logging.getLogger(__name__)


def create_post(
    session: Session,
    *,
    author: User,
    course_id: int,
    title: str,
    content: str,
) -> tuple[ForumPost, list[NotificationIntent]]:
    """Start a discussion in a course forum and tell the rest of the class."""
    course = get_course(session, course_id)
    post = ForumPost(course_id=course.id, author_email=author.email, title=title.strip(), content=content)
    session.add(post)
    session.commit()
    session.refresh(post)
    log.info("Forum post %s in course %s by %s", post.id, course.id, author.email)

    intents = [
        NotificationIntent(
            recipient=student.email,
            title="New Forum Post",
            message=f'A new discussion has been started in your course forum: "{post.title}"',
        )
        for student, _ in course_students(session, course.id)
        if student.email != author.email
    ]
    return post, intents


def add_reply(
    session: Session,
    *,
    author: User,
    post_id: int,
    content: str,
) -> tuple[ForumReply, list[NotificationIntent]]:
    post = session.get(ForumPost, post_id)
    if not post:
        raise NotFound("Post not found")

    reply = ForumReply(post_id=post.id, author_email=author.email, content=content)
    session.add(reply)
    session.commit()
    session.refresh(reply)
    log.info("Reply %s to forum post %s by %s", reply.id, post.id, author.email)

    if post.author_email == author.email:
        return reply, []
    return reply, [
        NotificationIntent(
            recipient=post.author_email,
            title="New Forum Reply",
            message=f'Someone replied to your post: "{post.title}"',
        )
    ]


def course_posts(session: Session, course_id: int) -> list[ForumPost]:
    get_course(session, course_id)
    return session.exec(
        select(ForumPost).where(ForumPost.course_id == course_id).order_by(ForumPost.created_at, ForumPost.id)
    ).all()
