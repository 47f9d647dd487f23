# app/api/endpoints/hod.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.api.deps import get_db_session, get_current_identity
from app.schemas.auth import Identity
from app.schemas.event import EventCreate, EventRead, EventWithAttendees
from app.services.event_service import (
    build_event_view,
    create_event,
    get_event_attendance,
    list_my_events,
)

router = APIRouter(prefix="/api/hod", tags=["HOD"])


# ------------------------------------------------------------
# PROPOSE EVENT (always created as pending)
# ------------------------------------------------------------
@router.post("/events", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def propose_event(
    data: EventCreate,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    event = await create_event(session, identity, data)
    return await build_event_view(session, event)


# ------------------------------------------------------------
# MY EVENTS (with registered students)
# ------------------------------------------------------------
@router.get("/events", response_model=List[EventWithAttendees])
async def my_events(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_my_events(session, identity)


# ------------------------------------------------------------
# ATTENDANCE FOR ONE EVENT
# ------------------------------------------------------------
@router.get("/events/{event_id}/attendance", response_model=EventWithAttendees)
async def event_attendance(
    event_id: UUID,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await get_event_attendance(session, identity, event_id)
