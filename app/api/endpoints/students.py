# app/api/endpoints/students.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from uuid import UUID

from app.api.deps import get_db_session, get_current_identity
from app.schemas.auth import Identity
from app.schemas.event import EventRead
from app.schemas.user import InterestsUpdate, UserRead
from app.services.auth_service import update_interests
from app.services.event_service import build_event_view
from app.services.registration_service import register_for_event
from app.services.student_service import list_my_registrations, recommend_events

router = APIRouter(
    prefix="/api/students",
    tags=["Students"]
)


# ------------------------------------------------------------
# RECOMMENDED EVENTS (by interest tags)
# ------------------------------------------------------------
@router.get("/recommendations", response_model=List[EventRead])
async def recommendations(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await recommend_events(session, identity)


# ------------------------------------------------------------
# REGISTER FOR EVENT
# ------------------------------------------------------------
@router.post("/events/{event_id}/register", response_model=EventRead)
async def register(
    event_id: UUID,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    event = await register_for_event(session, identity, event_id)
    return await build_event_view(session, event)


# ------------------------------------------------------------
# MY REGISTRATIONS
# ------------------------------------------------------------
@router.get("/registrations", response_model=List[EventRead])
async def my_registrations(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_my_registrations(session, identity)


# ------------------------------------------------------------
# REPLACE INTERESTS
# ------------------------------------------------------------
@router.put("/interests", response_model=UserRead)
async def replace_interests(
    data: InterestsUpdate,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await update_interests(session, identity, data.interests)
