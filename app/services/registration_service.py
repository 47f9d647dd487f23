# app/services/registration_service.py

from sqlmodel import select
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from loguru import logger
from uuid import UUID

from app.core.exceptions import AlreadyRegistered, EventFull, EventNotApproved, NotFound
from app.core.rbac import Operation, authorize
from app.models.enums import EventStatus
from app.models.event import Event
from app.models.event_registration import REGISTRATION_UNIQUE_CONSTRAINT, EventRegistration
from app.models.user import utcnow
from app.schemas.auth import Identity


async def _is_registered(session: AsyncSession, event_id: UUID, user_id: UUID) -> bool:
    result = await session.execute(
        select(EventRegistration.id).where(
            (EventRegistration.event_id == event_id) & (EventRegistration.user_id == user_id)
        )
    )
    return result.first() is not None


async def _claim_seat(session: AsyncSession, event_id: UUID) -> bool:
    """
    Take one seat with a single conditional UPDATE.

    The WHERE clause re-checks status and capacity inside the database, so two
    requests that both saw one free seat cannot both win it.
    """
    result = await session.execute(
        update(Event)
        .where(
            (Event.id == event_id)
            & (Event.status == EventStatus.Approved)
            & (Event.registered_count < Event.capacity)
        )
        .values(registered_count=Event.registered_count + 1, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def _is_duplicate_registration(exc: IntegrityError) -> bool:
    # Postgres names the constraint, SQLite names the columns
    message = str(exc.orig)
    return (
        REGISTRATION_UNIQUE_CONSTRAINT in message
        or "UNIQUE constraint failed: event_registrations" in message
    )


async def register_for_event(session: AsyncSession, identity: Identity, event_id: UUID) -> Event:
    """
    Admit the student into the event.

    Checks in order: event exists (NotFound), event approved
    (EventNotApproved), not already registered (AlreadyRegistered), seat
    available (EventFull). Nothing is written unless every check passes.
    """
    authorize(identity, Operation.RegisterForEvent)

    event = await session.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")

    if event.status != EventStatus.Approved:
        raise EventNotApproved()

    if await _is_registered(session, event_id, identity.id):
        raise AlreadyRegistered()

    if not await _claim_seat(session, event_id):
        # nothing was written; the event may have been rejected between
        # the read and the update
        current = await session.get(Event, event_id, populate_existing=True)
        if current is None:
            raise NotFound("Event not found")
        if current.status != EventStatus.Approved:
            raise EventNotApproved()
        raise EventFull()

    session.add(EventRegistration(event_id=event_id, user_id=identity.id))

    try:
        await session.commit()
    except IntegrityError as exc:
        # rolling back also releases the seat taken above
        await session.rollback()
        if _is_duplicate_registration(exc):
            # a concurrent request for the same student got there first
            raise AlreadyRegistered()
        logger.warning(f"Registration of {identity.id} for event {event_id} rejected: {exc.orig}")
        raise NotFound("User or event no longer exists")

    await session.refresh(event)
    logger.info(
        f"Student {identity.id} registered for event {event_id} "
        f"({event.registered_count}/{event.capacity})"
    )
    return event
