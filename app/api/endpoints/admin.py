# app/api/endpoints/admin.py

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from app.api.deps import get_db_session, get_current_identity
from app.models.user import UserRole
from app.schemas.auth import Identity
from app.schemas.event import AdminStats, EventRead
from app.schemas.user import HodCreate, UserRead
from app.services import audit_service
from app.services.approval_service import (
    approve_event,
    get_admin_stats,
    list_all_events,
    list_pending_events,
    reject_event,
)
from app.services.auth_service import create_hod, delete_user_by_id, list_users
from app.services.event_service import build_event_view

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# -------------------------------------------------------------------
# CREATE HOD
# -------------------------------------------------------------------
@router.post("/hods", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_hod_account(
    data: HodCreate,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    user = await create_hod(session, identity, data)

    background_tasks.add_task(
        audit_service.log_activity,
        audit_service.ACTION_HOD_CREATED,
        identity,
        target_user_id=user.id,
        details={"email": user.email, "department": user.department},
    )
    return user


# -------------------------------------------------------------------
# LIST USERS (optional role filter)
# -------------------------------------------------------------------
@router.get("/users", response_model=List[UserRead])
async def get_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_users(session, identity, role)


# -------------------------------------------------------------------
# DELETE USER (removes them from every event's registrations)
# -------------------------------------------------------------------
@router.delete("/users/{user_id}")
async def remove_user(
    user_id: UUID,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    user = await delete_user_by_id(session, identity, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    background_tasks.add_task(
        audit_service.log_activity,
        audit_service.ACTION_USER_DELETED,
        identity,
        target_user_id=user_id,
        details={"email": user.email, "role": user.role.value},
    )
    return {"detail": "User deleted successfully"}


# -------------------------------------------------------------------
# EVENT LISTS
# -------------------------------------------------------------------
@router.get("/events/pending", response_model=List[EventRead])
async def get_pending_events(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_pending_events(session, identity)


@router.get("/events", response_model=List[EventRead])
async def get_all_events(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_all_events(session, identity)


# -------------------------------------------------------------------
# APPROVE / REJECT
# -------------------------------------------------------------------
@router.post("/events/{event_id}/approve", response_model=EventRead)
async def approve(
    event_id: UUID,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    event, previous = await approve_event(session, identity, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    background_tasks.add_task(
        audit_service.log_activity,
        audit_service.ACTION_EVENT_APPROVED,
        identity,
        event_id=event.id,
        details={"event_title": event.title, "previous_status": previous.value},
    )
    return await build_event_view(session, event)


@router.post("/events/{event_id}/reject", response_model=EventRead)
async def reject(
    event_id: UUID,
    background_tasks: BackgroundTasks,
    remarks: Optional[str] = None,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    event, previous = await reject_event(session, identity, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    background_tasks.add_task(
        audit_service.log_activity,
        audit_service.ACTION_EVENT_REJECTED,
        identity,
        event_id=event.id,
        remarks=remarks,
        details={"event_title": event.title, "previous_status": previous.value},
    )
    return await build_event_view(session, event)


# -------------------------------------------------------------------
# DASHBOARD STATS
# -------------------------------------------------------------------
@router.get("/stats", response_model=AdminStats)
async def stats(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await get_admin_stats(session, identity)
