import pytest
from httpx import AsyncClient
from sqlmodel import Session, select

from eduportal.models import User
from eduportal.security import pwd_context
from tests.util import auth_headers


@pytest.mark.asyncio
async def test_register_student_generates_roll_number_and_parent(session: Session, client: AsyncClient, make_user):
    make_user("existing@school.test", department="Physics")

    response = await client.post(
        "/api/register",
        json={
            "email": "New@School.test",
            "password": "secret",
            "name": "New Student",
            "type": "student",
            "department": "Physics",
            "father_name": "Sam",
            "parent_email": "sam@home.test",
            "parent_password": "parent-secret",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["ok"] is True
    assert body["user"]["email"] == "new@school.test"
    assert body["user"]["roll_number"] == "PHY002"
    assert "password_hash" not in body["user"]

    parent = session.exec(select(User).where(User.email == "sam@home.test")).one()
    assert parent.type == "parent"
    assert parent.name == "Sam (Parent)"
    assert parent.student_email == "new@school.test"
    assert parent.check_password("parent-secret")


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, make_user):
    make_user("taken@school.test")

    response = await client.post(
        "/api/register",
        json={"email": "taken@school.test", "password": "x", "name": "Dup", "department": "Math"},
    )
    assert response.status_code == 409
    assert response.json() == {"ok": False, "error": "User already exists with this email"}


@pytest.mark.asyncio
async def test_register_admin_requires_admin(client: AsyncClient, make_user):
    payload = {"email": "boss@school.test", "password": "x", "name": "Boss", "type": "admin"}

    response = await client.post("/api/register", json=payload)
    assert response.status_code == 403

    admin = make_user("root@school.test", type="admin", department=None)
    response = await client.post("/api/register", json=payload, headers=auth_headers(admin))
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_register_rejects_unknown_type(client: AsyncClient):
    response = await client.post(
        "/api/register",
        json={"email": "x@school.test", "password": "x", "name": "X", "type": "janitor"},
    )
    assert response.status_code == 400
    assert response.json()["ok"] is False


@pytest.mark.asyncio
async def test_login_and_profile(client: AsyncClient, make_user):
    make_user("login@school.test", password="hunter2", name="Log In")

    response = await client.post("/api/login", json={"email": "login@school.test", "password": "hunter2"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["name"] == "Log In"

    profile = await client.get(
        "/api/profile/login@school.test",
        headers={"Authorization": f"Bearer {body['access_token']}"},
    )
    assert profile.status_code == 200
    assert profile.json()["user"]["email"] == "login@school.test"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, make_user):
    make_user("login@school.test", password="hunter2")

    response = await client.post("/api/login", json={"email": "login@school.test", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"ok": False, "error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_profile_unauthenticated(client: AsyncClient):
    response = await client.get("/api/profile/anyone@school.test")
    assert response.status_code == 401
    assert response.json() == {"ok": False, "error": "Not authenticated"}


@pytest.mark.asyncio
async def test_department_listings_and_parent_student(client: AsyncClient, make_user):
    kid = make_user("kid@school.test", department="Math")
    make_user("teach@school.test", type="teacher", department="Math")
    make_user("other@school.test", department="Art")
    parent = make_user("mum@home.test", type="parent", department=None, student_email="kid@school.test")

    students = await client.get("/api/students/Math", headers=auth_headers(kid))
    assert [s["email"] for s in students.json()["students"]] == ["kid@school.test"]

    teachers = await client.get("/api/teachers/Math", headers=auth_headers(kid))
    assert [t["email"] for t in teachers.json()["teachers"]] == ["teach@school.test"]

    child = await client.get("/api/parent-student/mum@home.test", headers=auth_headers(parent))
    assert child.json()["student"]["email"] == "kid@school.test"

    missing = await client.get("/api/parent-student/kid@school.test", headers=auth_headers(parent))
    assert missing.status_code == 404
    assert missing.json() == {"ok": False, "error": "Parent not found"}


@pytest.mark.asyncio
async def test_login_is_case_insensitive_and_upgrades_bcrypt_hash(session: Session, client: AsyncClient, make_user):
    user = make_user("legacy@school.test")
    user.password_hash = pwd_context.handler("bcrypt").hash("hunter2")
    session.add(user)
    session.commit()

    response = await client.post("/api/login", json={"email": " Legacy@School.test", "password": "hunter2"})
    assert response.status_code == 200

    session.refresh(user)
    assert user.password_hash.startswith("$argon2")
    assert user.check_password("hunter2")


@pytest.mark.asyncio
async def test_forbidden_role_uses_error_body(client: AsyncClient, make_user):
    student = make_user("kid@school.test")
    response = await client.post(
        "/api/grades",
        json={"student_email": "kid@school.test", "course": "Math", "grade": "A", "semester": "Fall"},
        headers=auth_headers(student),
    )
    assert response.status_code == 403
    assert response.json() == {"ok": False, "error": "Permission denied"}
