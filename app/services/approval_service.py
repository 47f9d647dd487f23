# app/services/approval_service.py

from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger
from typing import List, Optional
from uuid import UUID

from app.core.rbac import Operation, authorize
from app.models.enums import EventStatus
from app.models.event import Event
from app.models.user import User, UserRole, utcnow
from app.schemas.auth import Identity
from app.schemas.event import AdminStats, EventRead
from app.services.event_service import build_event_views


async def _set_event_status(
    session: AsyncSession,
    event_id: UUID,
    new_status: EventStatus,
) -> tuple[Optional[Event], Optional[EventStatus]]:
    """
    Unconditional status write. Any state may move to approved/rejected,
    so a rejected event can be approved again.
    Returns (event, previous_status); (None, None) when the id is unknown.
    """
    result = await session.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()

    if not event:
        return None, None

    previous = event.status
    event.status = new_status
    event.updated_at = utcnow()

    session.add(event)
    await session.commit()
    await session.refresh(event)
    return event, previous


async def approve_event(session: AsyncSession, identity: Identity, event_id: UUID):
    """Admin only. No-op (returns (None, None)) when the event does not exist."""
    authorize(identity, Operation.ApproveEvent)

    event, previous = await _set_event_status(session, event_id, EventStatus.Approved)
    if event:
        logger.info(f"Event {event.id} approved by {identity.id} (was {previous.value})")
    else:
        logger.warning(f"Approve requested for unknown event {event_id}")
    return event, previous


async def reject_event(session: AsyncSession, identity: Identity, event_id: UUID):
    """Admin only. No-op (returns (None, None)) when the event does not exist."""
    authorize(identity, Operation.RejectEvent)

    event, previous = await _set_event_status(session, event_id, EventStatus.Rejected)
    if event:
        logger.info(f"Event {event.id} rejected by {identity.id} (was {previous.value})")
    else:
        logger.warning(f"Reject requested for unknown event {event_id}")
    return event, previous


# ------------------------------------------------------------
# ADMIN LISTS (newest first)
# ------------------------------------------------------------
async def list_pending_events(session: AsyncSession, identity: Identity) -> List[EventRead]:
    authorize(identity, Operation.ListPendingEvents)

    result = await session.execute(
        select(Event)
        .where(Event.status == EventStatus.Pending)
        .order_by(Event.created_at.desc())
    )
    return await build_event_views(session, result.scalars().all())


async def list_all_events(session: AsyncSession, identity: Identity) -> List[EventRead]:
    authorize(identity, Operation.ListAllEvents)

    result = await session.execute(select(Event).order_by(Event.created_at.desc()))
    return await build_event_views(session, result.scalars().all())


# ------------------------------------------------------------
# ADMIN DASHBOARD STATS
# ------------------------------------------------------------
async def get_admin_stats(session: AsyncSession, identity: Identity) -> AdminStats:
    authorize(identity, Operation.ViewStats)

    role_res = await session.execute(select(User.role, func.count(User.id)).group_by(User.role))
    role_counts = {row[0]: row[1] for row in role_res.all()}

    status_res = await session.execute(select(Event.status, func.count(Event.id)).group_by(Event.status))
    status_counts = {row[0]: row[1] for row in status_res.all()}

    return AdminStats(
        total_users=sum(role_counts.values()),
        total_students=role_counts.get(UserRole.Student, 0),
        total_hods=role_counts.get(UserRole.HOD, 0),
        pending_events=status_counts.get(EventStatus.Pending, 0),
        approved_events=status_counts.get(EventStatus.Approved, 0),
        rejected_events=status_counts.get(EventStatus.Rejected, 0),
    )
