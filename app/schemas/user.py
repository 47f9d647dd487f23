from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field
from app.models.user import UserRole


# ---------------------------------------------------------
# BASE
# ---------------------------------------------------------
class UserBase(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr


# ---------------------------------------------------------
# CREATE HOD (Admin only, role is always forced to HOD)
# ---------------------------------------------------------
class HodCreate(UserBase):
    department: str = Field(min_length=1)
    password: Optional[str] = None   # falls back to DEFAULT_HOD_PASSWORD


# ---------------------------------------------------------
# INTEREST UPDATE (Student, full overwrite)
# ---------------------------------------------------------
class InterestsUpdate(BaseModel):
    interests: List[str]


# ---------------------------------------------------------
# READ USER (response; never exposes password_hash)
# ---------------------------------------------------------
class UserRead(UserBase):
    id: UUID
    role: UserRole
    department: Optional[str] = None
    interests: List[str] = []
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------
# SUMMARIES (embedded in event views)
# ---------------------------------------------------------
class OrganizerSummary(BaseModel):
    id: UUID
    name: str
    email: str
    department: Optional[str] = None

    class Config:
        from_attributes = True


class StudentSummary(BaseModel):
    id: UUID
    name: str
    email: str
    department: Optional[str] = None

    class Config:
        from_attributes = True
