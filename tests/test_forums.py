import pytest
from httpx import AsyncClient
from sqlmodel import Session, select

from eduportal.models import Course, Enrollment, Notification
from tests.util import auth_headers


@pytest.fixture(name="course")
def course_fixture(session: Session, make_user):
    make_user("prof@school.test", type="teacher")
    course = Course(course_name="Algebra", department="Computer Science", teacher_email="prof@school.test")
    session.add(course)
    session.commit()
    session.refresh(course)
    return course


def _enroll(session: Session, user, course):
    session.add(Enrollment(user_id=user.id, course_id=course.id))
    session.commit()


@pytest.mark.asyncio
async def test_post_notifies_classmates_but_not_author(session: Session, client: AsyncClient, make_user, course):
    author = make_user("kid@school.test")
    classmate = make_user("pal@school.test")
    make_user("outsider@school.test")
    _enroll(session, author, course)
    _enroll(session, classmate, course)

    response = await client.post(
        "/api/forum-posts",
        json={"course_id": course.id, "title": "Homework 3", "content": "Anyone stuck on question 2?"},
        headers=auth_headers(author),
    )
    assert response.status_code == 201
    assert response.json()["post"]["author_email"] == "kid@school.test"

    notes = session.exec(select(Notification)).all()
    assert [(n.user_email, n.title) for n in notes] == [("pal@school.test", "New Forum Post")]
    assert '"Homework 3"' in notes[0].message


@pytest.mark.asyncio
async def test_reply_notifies_post_author_once(session: Session, client: AsyncClient, make_user, course):
    author = make_user("kid@school.test")
    prof = make_user("helper@school.test", type="teacher")

    post = await client.post(
        "/api/forum-posts",
        json={"course_id": course.id, "title": "Exam date?", "content": "When is it?"},
        headers=auth_headers(author),
    )
    post_id = post.json()["post"]["id"]

    reply = await client.post(
        "/api/forum-replies",
        json={"post_id": post_id, "content": "Next Friday"},
        headers=auth_headers(prof),
    )
    assert reply.status_code == 201

    own_reply = await client.post(
        "/api/forum-replies",
        json={"post_id": post_id, "content": "Thanks!"},
        headers=auth_headers(author),
    )
    assert own_reply.status_code == 201

    notes = session.exec(select(Notification)).all()
    assert [(n.user_email, n.title) for n in notes] == [("kid@school.test", "New Forum Reply")]

    listing = await client.get(f"/api/forum-posts/{course.id}", headers=auth_headers(author))
    posts = listing.json()["posts"]
    assert [p["title"] for p in posts] == ["Exam date?"]
    assert [r["content"] for r in posts[0]["replies"]] == ["Next Friday", "Thanks!"]


@pytest.mark.asyncio
async def test_forum_missing_post_and_course(client: AsyncClient, make_user):
    kid = make_user("kid@school.test")

    reply = await client.post("/api/forum-replies", json={"post_id": 999, "content": "Hello?"}, headers=auth_headers(kid))
    assert reply.status_code == 404
    assert reply.json() == {"ok": False, "error": "Post not found"}

    post = await client.post(
        "/api/forum-posts",
        json={"course_id": 999, "title": "Hi", "content": "Hi"},
        headers=auth_headers(kid),
    )
    assert post.status_code == 404
    assert post.json() == {"ok": False, "error": "Course not found"}
