from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.enums import EventStatus
from app.schemas.user import OrganizerSummary, StudentSummary


# ---------------------------------------------------------
# CREATE EVENT (HOD)
# There is no status field: new events are always pending.
# ---------------------------------------------------------
class EventCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: datetime
    venue: str = Field(min_length=1)
    category: str = Field(min_length=1)
    capacity: int = Field(ge=1)
    banner_url: Optional[str] = None


# ---------------------------------------------------------
# READ EVENT
# ---------------------------------------------------------
class EventRead(BaseModel):
    id: UUID
    title: str
    description: str
    organizer_id: Optional[UUID] = None
    organizer: Optional[OrganizerSummary] = None
    date: datetime
    venue: str
    category: str
    status: EventStatus
    banner_url: Optional[str] = None
    capacity: int
    registered_count: int
    registered_students: List[UUID] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# HOD views carry the registered students themselves
class EventWithAttendees(EventRead):
    attendees: List[StudentSummary] = []


# ---------------------------------------------------------
# ADMIN DASHBOARD STATS
# ---------------------------------------------------------
class AdminStats(BaseModel):
    total_users: int
    total_students: int
    total_hods: int
    pending_events: int
    approved_events: int
    rejected_events: int
