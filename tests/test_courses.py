import pytest
from httpx import AsyncClient
from sqlmodel import Session, select

from eduportal.models import Notification
from tests.util import auth_headers


async def _create_course(client, teacher, **overrides):
    payload = {"course_name": "Algorithms", "department": "Computer Science", "description": "Sorting and graphs"}
    payload.update(overrides)
    response = await client.post("/api/courses", json=payload, headers=auth_headers(teacher))
    assert response.status_code == 201
    return response.json()["course"]


@pytest.mark.asyncio
async def test_create_course_notifies_department_students(session: Session, client: AsyncClient, make_user):
    teacher = make_user("prof@school.test", type="teacher")
    make_user("a@school.test")
    make_user("b@school.test")
    make_user("art@school.test", department="Art")

    course = await _create_course(client, teacher)
    assert course["teacher_email"] == "prof@school.test"
    assert course["duration"] == "1 semester"

    rows = session.exec(select(Notification).where(Notification.title == "New Course Available")).all()
    assert sorted(row.user_email for row in rows) == ["a@school.test", "b@school.test"]


@pytest.mark.asyncio
async def test_students_cannot_create_courses(client: AsyncClient, make_user):
    student = make_user("a@school.test")
    response = await client.post(
        "/api/courses",
        json={"course_name": "Hacking", "department": "Computer Science"},
        headers=auth_headers(student),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_enroll_once_and_list(session: Session, client: AsyncClient, make_user):
    teacher = make_user("prof@school.test", type="teacher")
    student = make_user("a@school.test")
    course = await _create_course(client, teacher)

    payload = {"student_email": "a@school.test", "course_id": course["id"]}
    first = await client.post("/api/enroll", json=payload, headers=auth_headers(student))
    assert first.json() == {"ok": True, "message": "Enrolled successfully"}

    second = await client.post("/api/enroll", json=payload, headers=auth_headers(student))
    assert second.status_code == 409
    assert second.json()["error"] == "Already enrolled in this course"

    enrolled = await client.get("/api/enrolled-courses/a@school.test", headers=auth_headers(student))
    assert [c["course_name"] for c in enrolled.json()["courses"]] == ["Algorithms"]
    assert enrolled.json()["courses"][0]["enrolled_at"]

    roster = await client.get(f"/api/course-students/{course['id']}", headers=auth_headers(teacher))
    assert [s["email"] for s in roster.json()["students"]] == ["a@school.test"]

    notified = session.exec(select(Notification).where(Notification.user_email == "prof@school.test")).all()
    assert [n.title for n in notified] == ["New Student Enrollment"]


@pytest.mark.asyncio
async def test_student_cannot_enroll_someone_else(client: AsyncClient, make_user):
    teacher = make_user("prof@school.test", type="teacher")
    student = make_user("a@school.test")
    make_user("b@school.test")
    course = await _create_course(client, teacher)

    response = await client.post(
        "/api/enroll",
        json={"student_email": "b@school.test", "course_id": course["id"]},
        headers=auth_headers(student),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_enroll_unknown_course(client: AsyncClient, make_user):
    student = make_user("a@school.test")
    response = await client.post(
        "/api/enroll",
        json={"student_email": "a@school.test", "course_id": 999},
        headers=auth_headers(student),
    )
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Course not found"}


@pytest.mark.asyncio
async def test_course_listings(client: AsyncClient, make_user):
    teacher = make_user("prof@school.test", type="teacher")
    await _create_course(client, teacher)
    await _create_course(client, teacher, course_name="Sculpture", department="Art")

    by_department = await client.get("/api/courses/Art", headers=auth_headers(teacher))
    assert [c["course_name"] for c in by_department.json()["courses"]] == ["Sculpture"]

    everything = await client.get("/api/all-courses", headers=auth_headers(teacher))
    assert len(everything.json()["courses"]) == 2
