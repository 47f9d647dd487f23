#app/models/audit.py

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, JSON
from typing import Optional, Dict, Any
from uuid import UUID, uuid4
from datetime import datetime

from app.models.user import utcnow

class AuditLog(SQLModel, table=True):
    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # No foreign keys: entries outlive deleted users and events
    actor_id: Optional[UUID] = Field(default=None, index=True)
    actor_role: Optional[str] = None
    actor_name: Optional[str] = None

    event_id: Optional[UUID] = Field(default=None, index=True)
    target_user_id: Optional[UUID] = None

    action: str = Field(index=True)
    remarks: Optional[str] = None

    # e.g. {"event_title": "...", "previous_status": "pending"}
    details: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    timestamp: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
