import pytest

from app.models.user import UserRole


@pytest.mark.asyncio
async def test_register_always_creates_student(client):
    res = await client.post("/api/auth/register", json={
        "name": "Aarav Patel",
        "email": "aarav@student.com",
        "password": "student123",
        "department": "Computer Science",
        "interests": ["Coding", " AI/ML ", "Coding", ""],
        "role": "admin",
    })
    assert res.status_code == 201

    body = res.json()
    assert body["role"] == "student"
    assert body["interests"] == ["Coding", "AI/ML"]
    assert "password_hash" not in body


@pytest.mark.asyncio
async def test_register_duplicate_email(client, student):
    res = await client.post("/api/auth/register", json={
        "name": "Someone Else",
        "email": student.email,
        "password": "student123",
        "department": "Computer Science",
    })
    assert res.status_code == 400
    assert res.json()["detail"] == "Email already registered"
    assert res.json()["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_register_rejects_invalid_email(client):
    res = await client.post("/api/auth/register", json={
        "name": "Bad Email",
        "email": "not-an-email",
        "password": "student123",
        "department": "Computer Science",
    })
    assert res.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role, dashboard",
    [
        (UserRole.Admin, "/admin/dashboard"),
        (UserRole.HOD, "/hod/dashboard"),
        (UserRole.Student, "/student/dashboard"),
    ],
)
async def test_login_returns_token_and_dashboard(client, create_account, role, dashboard):
    user = await create_account(role, email=f"{role.value}@college.com", password="secret123")

    res = await client.post("/api/auth/login", json={"email": user.email, "password": "secret123"})
    assert res.status_code == 200

    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["redirect_url"] == dashboard
    assert body["user"]["role"] == role.value
    assert body["expires_in"] > 0


@pytest.mark.asyncio
async def test_login_wrong_password(client, student):
    res = await client.post("/api/auth/login", json={"email": student.email, "password": "wrong"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email(client):
    res = await client.post("/api/auth/login", json={"email": "ghost@college.com", "password": "x"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_me_requires_token(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_me_rejects_garbage_token(client):
    res = await client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_me_with_login_token(client, create_account):
    user = await create_account(UserRole.Student, email="me@student.com", password="secret123")
    login = await client.post("/api/auth/login", json={"email": "me@student.com", "password": "secret123"})
    token = login.json()["access_token"]

    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["id"] == str(user.id)
    assert res.json()["email"] == "me@student.com"


@pytest.mark.asyncio
async def test_token_of_deleted_user_is_rejected(client, admin, student, headers_for):
    student_headers = headers_for(student)

    res = await client.delete(f"/api/admin/users/{student.id}", headers=headers_for(admin))
    assert res.status_code == 200

    res = await client.get("/api/auth/me", headers=student_headers)
    assert res.status_code == 401
