# app/api/endpoints/events.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.api.deps import get_db_session, get_current_identity
from app.schemas.auth import Identity
from app.schemas.event import EventRead
from app.services.event_service import list_approved_events

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=List[EventRead])
async def browse_events(
    search: Optional[str] = Query(None, description="Matches title, description or venue"),
    category: Optional[str] = Query(None, description="Interest tag, or 'all'"),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await list_approved_events(session, identity, search=search, category=category)
