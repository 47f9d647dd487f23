# app/services/audit_service.py

from uuid import UUID
from typing import Optional, Dict, Any, List

from loguru import logger
from sqlmodel import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import AsyncSessionLocal
from app.core.rbac import Operation, authorize
from app.models.audit import AuditLog
from app.schemas.auth import Identity


# Actions recorded in the audit trail
ACTION_EVENT_APPROVED = "EVENT_APPROVED"
ACTION_EVENT_REJECTED = "EVENT_REJECTED"
ACTION_HOD_CREATED = "HOD_CREATED"
ACTION_USER_DELETED = "USER_DELETED"


async def log_activity(
    action: str,
    actor: Identity,
    event_id: Optional[UUID] = None,
    target_user_id: Optional[UUID] = None,
    remarks: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
):
    """
    Creates an audit log entry in its own DB session.
    Safe for use in BackgroundTasks: the request session is closed by then.
    """
    async with AsyncSessionLocal() as session:
        try:
            session.add(AuditLog(
                actor_id=actor.id,
                actor_role=actor.role.value,
                actor_name=actor.name,
                event_id=event_id,
                target_user_id=target_user_id,
                action=action,
                remarks=remarks,
                details=details or {}
            ))
            await session.commit()

        except SQLAlchemyError:
            # the audited action already committed; losing the entry must not fail it
            logger.exception(f"Audit log write failed for {action}")
            await session.rollback()


async def list_audit_logs(
    session: AsyncSession,
    identity: Identity,
    action: Optional[str] = None,
    event_id: Optional[UUID] = None,
    limit: int = 100,
) -> List[AuditLog]:
    authorize(identity, Operation.ViewAuditLogs)

    query = select(AuditLog).order_by(AuditLog.timestamp.desc()).limit(limit)

    if action:
        query = query.where(AuditLog.action == action)
    if event_id:
        query = query.where(AuditLog.event_id == event_id)

    result = await session.execute(query)
    return result.scalars().all()
