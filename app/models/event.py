# app/models/event.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import EventStatus
from app.models.user import utcnow


class Event(SQLModel, table=True):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="ck_events_capacity_non_negative"),
        CheckConstraint(
            "registered_count >= 0 AND registered_count <= capacity",
            name="ck_events_registered_within_capacity",
        ),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        sa_column=Column(Uuid, primary_key=True)
    )

    title: str = Field(sa_column=Column(String(200), nullable=False))
    description: str = Field(sa_column=Column(Text, nullable=False))

    # cleared when the organizing HOD account is deleted
    organizer_id: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    )

    date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    venue: str = Field(sa_column=Column(String(200), nullable=False))
    category: str = Field(sa_column=Column(String(64), nullable=False, index=True))

    status: EventStatus = Field(
        default=EventStatus.Pending,
        sa_column=Column(
            SAEnum(EventStatus, name="event_status", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
            index=True,
        )
    )

    banner_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String, nullable=True)
    )

    capacity: int = Field(sa_column=Column(Integer, nullable=False))

    # mirrors the number of rows in event_registrations; the capacity guard
    # increments it with a conditional UPDATE
    registered_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0")
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
