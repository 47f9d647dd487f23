# app/api/endpoints/logs.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from app.api.deps import get_db_session, get_current_identity
from app.schemas.audit import AuditLogRead
from app.schemas.auth import Identity
from app.services.audit_service import list_audit_logs

router = APIRouter(prefix="/api/admin", tags=["Audit & Logs"])


# -------------------------------------------------------------------
# VIEW ADMIN ACTION AUDIT TRAIL
# -------------------------------------------------------------------
@router.get("/audit-logs", response_model=List[AuditLogRead])
async def get_audit_logs(
    action: Optional[str] = Query(None, description="e.g. EVENT_APPROVED"),
    event_id: Optional[UUID] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    """Who approved, rejected, created or deleted what, newest first."""
    return await list_audit_logs(session, identity, action=action, event_id=event_id, limit=limit)
