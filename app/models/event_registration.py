# app/models/event_registration.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from datetime import datetime
import uuid
from typing import Optional

from app.models.user import utcnow

REGISTRATION_UNIQUE_CONSTRAINT = "uq_event_registrations_event_user"


class EventRegistration(SQLModel, table=True):
    """One student in an event's registration list; ``id`` gives the order."""

    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name=REGISTRATION_UNIQUE_CONSTRAINT),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )

    event_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    )

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )

    registered_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
