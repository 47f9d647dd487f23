# app/services/student_service.py

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import NotFound
from app.core.rbac import Operation, authorize
from app.models.enums import EventStatus
from app.models.event import Event
from app.models.event_registration import EventRegistration
from app.schemas.auth import Identity
from app.schemas.event import EventRead
from app.services.auth_service import get_user_by_id
from app.services.event_service import build_event_views


# ------------------------------------------------------------
# RECOMMENDED EVENTS
# ------------------------------------------------------------
async def recommend_events(
    session: AsyncSession,
    identity: Identity,
    now: Optional[datetime] = None,
) -> List[EventRead]:
    """
    Approved, upcoming events whose category is one of the student's
    interests, soonest first. No interests means no recommendations.
    """
    authorize(identity, Operation.ViewRecommendations)

    user = await get_user_by_id(session, identity.id)
    if not user:
        raise NotFound("User not found")

    if not user.interests:
        return []

    now = now or datetime.now(timezone.utc)

    result = await session.execute(
        select(Event)
        .where(
            (Event.status == EventStatus.Approved)
            & (Event.category.in_(user.interests))
            & (Event.date >= now)
        )
        .order_by(Event.date.asc())
    )
    return await build_event_views(session, result.scalars().all())


# ------------------------------------------------------------
# MY REGISTRATIONS
# ------------------------------------------------------------
async def list_my_registrations(session: AsyncSession, identity: Identity) -> List[EventRead]:
    authorize(identity, Operation.ViewRegistrations)

    result = await session.execute(
        select(Event)
        .join(EventRegistration, EventRegistration.event_id == Event.id)
        .where(
            (EventRegistration.user_id == identity.id)
            & (Event.status == EventStatus.Approved)
        )
        .order_by(Event.date.asc())
    )
    return await build_event_views(session, result.scalars().all())
