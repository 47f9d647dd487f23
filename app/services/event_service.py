# app/services/event_service.py

from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from loguru import logger
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.exceptions import NotFound
from app.core.rbac import Operation, authorize
from app.models.enums import EventStatus
from app.models.event import Event
from app.models.event_registration import EventRegistration
from app.models.user import User
from app.schemas.auth import Identity
from app.schemas.event import EventCreate, EventRead, EventWithAttendees
from app.schemas.user import OrganizerSummary, StudentSummary


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def contains_pattern(text: str) -> str:
    """LIKE pattern matching ``text`` literally anywhere; escape char is a backslash."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


# ------------------------------------------------------------
# VIEW BUILDERS
# ------------------------------------------------------------
async def _registrations_by_event(
    session: AsyncSession, event_ids: Sequence[UUID]
) -> Dict[UUID, List[UUID]]:
    if not event_ids:
        return {}

    result = await session.execute(
        select(EventRegistration.event_id, EventRegistration.user_id)
        .where(EventRegistration.event_id.in_(event_ids))
        .order_by(EventRegistration.id.asc())
    )
    registrations: Dict[UUID, List[UUID]] = defaultdict(list)
    for event_id, user_id in result.all():
        registrations[event_id].append(user_id)
    return registrations


async def _users_by_id(session: AsyncSession, user_ids) -> Dict[UUID, User]:
    user_ids = set(user_ids)
    if not user_ids:
        return {}
    result = await session.execute(select(User).where(User.id.in_(user_ids)))
    return {u.id: u for u in result.scalars().all()}


async def build_event_views(
    session: AsyncSession,
    events: Sequence[Event],
    with_attendees: bool = False,
) -> List[EventRead]:
    """Attach organizer summary and the ordered registration list."""
    registrations = await _registrations_by_event(session, [e.id for e in events])

    wanted = {e.organizer_id for e in events if e.organizer_id}
    if with_attendees:
        for ids in registrations.values():
            wanted.update(ids)
    users = await _users_by_id(session, wanted)

    views = []
    for event in events:
        data = event.model_dump()
        data["registered_students"] = registrations.get(event.id, [])

        organizer = users.get(event.organizer_id) if event.organizer_id else None
        data["organizer"] = OrganizerSummary.model_validate(organizer) if organizer else None

        if with_attendees:
            data["attendees"] = [
                StudentSummary.model_validate(users[uid])
                for uid in data["registered_students"]
                if uid in users
            ]
            views.append(EventWithAttendees(**data))
        else:
            views.append(EventRead(**data))

    return views


async def build_event_view(session: AsyncSession, event: Event, with_attendees: bool = False) -> EventRead:
    views = await build_event_views(session, [event], with_attendees=with_attendees)
    return views[0]


# ------------------------------------------------------------
# FETCH
# ------------------------------------------------------------
async def get_registered_user_ids(session: AsyncSession, event_id: UUID) -> List[UUID]:
    registrations = await _registrations_by_event(session, [event_id])
    return registrations.get(event_id, [])


# ------------------------------------------------------------
# HOD: CREATE EVENT (always pending)
# ------------------------------------------------------------
async def create_event(session: AsyncSession, identity: Identity, data: EventCreate) -> Event:
    authorize(identity, Operation.CreateEvent)

    event = Event(
        title=data.title.strip(),
        description=data.description.strip(),
        organizer_id=identity.id,
        date=as_utc(data.date),
        venue=data.venue.strip(),
        category=data.category.strip(),
        status=EventStatus.Pending,
        banner_url=data.banner_url or None,
        capacity=data.capacity,
        registered_count=0,
    )

    session.add(event)
    await session.commit()
    await session.refresh(event)

    logger.info(f"HOD {identity.id} proposed event '{event.title}' ({event.id})")
    return event


# ------------------------------------------------------------
# HOD: MY EVENTS (newest first)
# ------------------------------------------------------------
async def list_my_events(session: AsyncSession, identity: Identity) -> List[EventRead]:
    authorize(identity, Operation.ListOwnEvents)

    result = await session.execute(
        select(Event)
        .where(Event.organizer_id == identity.id)
        .order_by(Event.created_at.desc())
    )
    return await build_event_views(session, result.scalars().all(), with_attendees=True)


# ------------------------------------------------------------
# HOD: ATTENDANCE FOR ONE OF MY EVENTS
# ------------------------------------------------------------
async def get_event_attendance(session: AsyncSession, identity: Identity, event_id: UUID) -> EventRead:
    authorize(identity, Operation.ViewAttendance)

    result = await session.execute(
        select(Event).where((Event.id == event_id) & (Event.organizer_id == identity.id))
    )
    event = result.scalar_one_or_none()
    if not event:
        raise NotFound("Event not found")

    return await build_event_view(session, event, with_attendees=True)


# ------------------------------------------------------------
# BROWSE APPROVED EVENTS (search + category, by date)
# ------------------------------------------------------------
async def list_approved_events(
    session: AsyncSession,
    identity: Identity,
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[EventRead]:
    authorize(identity, Operation.BrowseEvents)

    query = select(Event).where(Event.status == EventStatus.Approved)

    if search:
        pattern = contains_pattern(search.strip())
        query = query.where(
            or_(
                Event.title.ilike(pattern, escape="\\"),
                Event.description.ilike(pattern, escape="\\"),
                Event.venue.ilike(pattern, escape="\\"),
            )
        )

    if category and category != "all":
        query = query.where(Event.category == category)

    result = await session.execute(query.order_by(Event.date.asc()))
    return await build_event_views(session, result.scalars().all())
