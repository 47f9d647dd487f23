import uuid

import pytest

from app.models.enums import EventStatus
from app.models.user import UserRole


def _event_payload(**overrides):
    payload = {
        "title": "Code Sprint 2026",
        "description": "24-hour coding competition",
        "date": "2030-03-15T10:00:00Z",
        "venue": "CS Lab Complex, Block A",
        "category": "Coding",
        "capacity": 100,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_hod_proposal_is_always_pending(client, hod, headers_for):
    res = await client.post(
        "/api/hod/events",
        json=_event_payload(status="approved", registered_count=50),
        headers=headers_for(hod),
    )
    assert res.status_code == 201

    body = res.json()
    assert body["status"] == "pending"
    assert body["registered_count"] == 0
    assert body["registered_students"] == []
    assert body["organizer_id"] == str(hod.id)
    assert body["organizer"]["name"] == hod.name


@pytest.mark.asyncio
async def test_only_hods_propose_events(client, admin, student, headers_for):
    for user in (admin, student):
        res = await client.post("/api/hod/events", json=_event_payload(), headers=headers_for(user))
        assert res.status_code == 403


@pytest.mark.asyncio
async def test_proposal_requires_positive_capacity(client, hod, headers_for):
    res = await client.post("/api/hod/events", json=_event_payload(capacity=0), headers=headers_for(hod))
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_proposal_appears_in_admin_queue(client, admin, hod, headers_for):
    created = await client.post("/api/hod/events", json=_event_payload(), headers=headers_for(hod))

    res = await client.get("/api/admin/events/pending", headers=headers_for(admin))
    assert [e["id"] for e in res.json()] == [created.json()["id"]]

    # not visible to students until approved
    browse = await client.get("/api/events", headers=headers_for(hod))
    assert browse.json() == []


@pytest.mark.asyncio
async def test_my_events_lists_attendees(client, hod, create_account, create_event, headers_for):
    other_hod = await create_account(UserRole.HOD, department="Physics")
    a = await create_account(UserRole.Student, name="Aarav Patel")
    b = await create_account(UserRole.Student, name="Diya Singh")

    mine = await create_event(hod, registered=[a, b])
    await create_event(hod, status=EventStatus.Pending)
    await create_event(other_hod)

    res = await client.get("/api/hod/events", headers=headers_for(hod))
    assert res.status_code == 200
    assert len(res.json()) == 2

    by_id = {e["id"]: e for e in res.json()}
    attendees = by_id[str(mine.id)]["attendees"]
    assert [s["name"] for s in attendees] == ["Aarav Patel", "Diya Singh"]
    assert "password_hash" not in attendees[0]


@pytest.mark.asyncio
async def test_attendance_for_own_event(client, hod, student, create_event, headers_for):
    event = await create_event(hod, registered=[student])

    res = await client.get(f"/api/hod/events/{event.id}/attendance", headers=headers_for(hod))
    assert res.status_code == 200
    assert res.json()["registered_students"] == [str(student.id)]
    assert res.json()["attendees"][0]["email"] == student.email


@pytest.mark.asyncio
async def test_attendance_for_someone_elses_event(client, hod, create_account, create_event, headers_for):
    other_hod = await create_account(UserRole.HOD, department="Physics")
    event = await create_event(other_hod)

    res = await client.get(f"/api/hod/events/{event.id}/attendance", headers=headers_for(hod))
    assert res.status_code == 404

    res = await client.get(f"/api/hod/events/{uuid.uuid4()}/attendance", headers=headers_for(hod))
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_students_cannot_see_hod_views(client, student, headers_for):
    res = await client.get("/api/hod/events", headers=headers_for(student))
    assert res.status_code == 403
