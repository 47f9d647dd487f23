import uuid

import pytest

from app.models.enums import EventStatus
from app.models.user import UserRole
from app.services.auth_service import delete_user_by_id
from app.services.event_service import get_registered_user_ids


# -------------------------------------------------------------------
# HOD ACCOUNTS
# -------------------------------------------------------------------
@pytest.mark.asyncio
async def test_admin_creates_hod_with_default_password(client, admin, headers_for):
    res = await client.post(
        "/api/admin/hods",
        json={"name": "Dr. Rajesh Kumar", "email": "hod.mech@college.com", "department": "Mechanical Engineering"},
        headers=headers_for(admin),
    )
    assert res.status_code == 201
    assert res.json()["role"] == "hod"
    assert res.json()["department"] == "Mechanical Engineering"

    login = await client.post("/api/auth/login", json={"email": "hod.mech@college.com", "password": "hod123"})
    assert login.status_code == 200
    assert login.json()["redirect_url"] == "/hod/dashboard"


@pytest.mark.asyncio
async def test_create_hod_requires_admin(client, hod, student, headers_for):
    payload = {"name": "X", "email": "x@college.com", "department": "Physics"}
    for user in (hod, student):
        res = await client.post("/api/admin/hods", json=payload, headers=headers_for(user))
        assert res.status_code == 403
        assert res.json()["code"] == "PERMISSION_DENIED"


@pytest.mark.asyncio
async def test_create_hod_duplicate_email(client, admin, hod, headers_for):
    res = await client.post(
        "/api/admin/hods",
        json={"name": "Dup", "email": hod.email, "department": "Physics"},
        headers=headers_for(admin),
    )
    assert res.status_code == 400


# -------------------------------------------------------------------
# USERS
# -------------------------------------------------------------------
@pytest.mark.asyncio
async def test_list_users_by_role(client, admin, hod, student, create_account, headers_for):
    await create_account(UserRole.Student)

    res = await client.get("/api/admin/users", params={"role": "student"}, headers=headers_for(admin))
    assert res.status_code == 200
    assert len(res.json()) == 2
    assert {u["role"] for u in res.json()} == {"student"}

    res = await client.get("/api/admin/users", headers=headers_for(admin))
    assert len(res.json()) == 4


@pytest.mark.asyncio
async def test_list_users_forbidden_for_students(client, student, headers_for):
    res = await client.get("/api/admin/users", headers=headers_for(student))
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_delete_student_removes_registrations(
    client, db_session, admin, hod, create_account, create_event, headers_for
):
    a = await create_account(UserRole.Student, name="A")
    b = await create_account(UserRole.Student, name="B")
    c = await create_account(UserRole.Student, name="C")
    event = await create_event(hod, capacity=5, registered=[a, b, c])

    res = await client.delete(f"/api/admin/users/{b.id}", headers=headers_for(admin))
    assert res.status_code == 200
    assert res.json()["detail"] == "User deleted successfully"

    assert await get_registered_user_ids(db_session, event.id) == [a.id, c.id]
    await db_session.refresh(event)
    assert event.registered_count == 2


@pytest.mark.asyncio
async def test_delete_student_keeps_counts_in_step_with_rows(
    db_session, admin, hod, student, create_account, create_event, identity_of
):
    other = await create_account(UserRole.Student)
    events = [
        await create_event(hod, capacity=3, registered=[student, other]),
        await create_event(hod, capacity=3, registered=[other, student]),
        await create_event(hod, capacity=3, registered=[other]),
    ]

    deleted = await delete_user_by_id(db_session, identity_of(admin), student.id)
    assert deleted.id == student.id

    for event in events:
        await db_session.refresh(event)
        assert await get_registered_user_ids(db_session, event.id) == [other.id]
        assert event.registered_count == 1


@pytest.mark.asyncio
async def test_delete_hod_keeps_their_events(client, db_session, admin, hod, create_event, headers_for):
    event = await create_event(hod, status=EventStatus.Pending)

    res = await client.delete(f"/api/admin/users/{hod.id}", headers=headers_for(admin))
    assert res.status_code == 200

    await db_session.refresh(event)
    assert event.organizer_id is None

    res = await client.get("/api/admin/events", headers=headers_for(admin))
    assert [e["id"] for e in res.json()] == [str(event.id)]
    assert res.json()[0]["organizer"] is None


@pytest.mark.asyncio
async def test_delete_unknown_user(client, admin, headers_for):
    res = await client.delete(f"/api/admin/users/{uuid.uuid4()}", headers=headers_for(admin))
    assert res.status_code == 404


# -------------------------------------------------------------------
# APPROVAL WORKFLOW
# -------------------------------------------------------------------
@pytest.mark.asyncio
async def test_pending_queue_and_approve(client, admin, hod, create_event, headers_for):
    pending = await create_event(hod, status=EventStatus.Pending)
    await create_event(hod, status=EventStatus.Approved)

    res = await client.get("/api/admin/events/pending", headers=headers_for(admin))
    assert [e["id"] for e in res.json()] == [str(pending.id)]

    res = await client.post(f"/api/admin/events/{pending.id}/approve", headers=headers_for(admin))
    assert res.status_code == 200
    assert res.json()["status"] == "approved"
    assert res.json()["organizer"]["id"] == str(hod.id)

    res = await client.get("/api/admin/events/pending", headers=headers_for(admin))
    assert res.json() == []


@pytest.mark.asyncio
async def test_rejected_event_can_be_approved_again(client, admin, hod, create_event, headers_for):
    event = await create_event(hod, status=EventStatus.Pending)

    res = await client.post(
        f"/api/admin/events/{event.id}/reject",
        params={"remarks": "Clashes with exams"},
        headers=headers_for(admin),
    )
    assert res.json()["status"] == "rejected"

    res = await client.post(f"/api/admin/events/{event.id}/approve", headers=headers_for(admin))
    assert res.json()["status"] == "approved"


@pytest.mark.asyncio
async def test_approve_unknown_event(client, admin, headers_for):
    res = await client.post(f"/api/admin/events/{uuid.uuid4()}/approve", headers=headers_for(admin))
    assert res.status_code == 404

    res = await client.post(f"/api/admin/events/{uuid.uuid4()}/reject", headers=headers_for(admin))
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_hod_cannot_approve(client, hod, create_event, headers_for):
    event = await create_event(hod, status=EventStatus.Pending)

    res = await client.post(f"/api/admin/events/{event.id}/approve", headers=headers_for(hod))
    assert res.status_code == 403


# -------------------------------------------------------------------
# STATS + AUDIT TRAIL
# -------------------------------------------------------------------
@pytest.mark.asyncio
async def test_stats(client, admin, hod, student, create_event, headers_for):
    await create_event(hod, status=EventStatus.Pending)
    await create_event(hod, status=EventStatus.Approved)
    await create_event(hod, status=EventStatus.Approved)
    await create_event(hod, status=EventStatus.Rejected)

    res = await client.get("/api/admin/stats", headers=headers_for(admin))
    assert res.status_code == 200
    assert res.json() == {
        "total_users": 3,
        "total_students": 1,
        "total_hods": 1,
        "pending_events": 1,
        "approved_events": 2,
        "rejected_events": 1,
    }


@pytest.mark.asyncio
async def test_audit_trail_records_decisions(client, admin, hod, create_event, headers_for):
    event = await create_event(hod, status=EventStatus.Pending)

    await client.post(
        f"/api/admin/events/{event.id}/reject",
        params={"remarks": "Venue unavailable"},
        headers=headers_for(admin),
    )
    await client.post(f"/api/admin/events/{event.id}/approve", headers=headers_for(admin))

    res = await client.get(
        "/api/admin/audit-logs", params={"event_id": str(event.id)}, headers=headers_for(admin)
    )
    assert res.status_code == 200

    actions = {log["action"]: log for log in res.json()}
    assert set(actions) == {"EVENT_REJECTED", "EVENT_APPROVED"}
    assert actions["EVENT_REJECTED"]["remarks"] == "Venue unavailable"
    assert actions["EVENT_REJECTED"]["details"]["previous_status"] == "pending"
    assert actions["EVENT_APPROVED"]["details"]["previous_status"] == "rejected"
    assert actions["EVENT_APPROVED"]["actor_id"] == str(admin.id)
    assert actions["EVENT_APPROVED"]["actor_role"] == "admin"


@pytest.mark.asyncio
async def test_audit_logs_admin_only(client, hod, headers_for):
    res = await client.get("/api/admin/audit-logs", headers=headers_for(hod))
    assert res.status_code == 403
