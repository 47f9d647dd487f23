# app/models/user.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, JSON, String, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime, timezone
import uuid
from enum import Enum
from typing import List, Optional


class UserRole(str, Enum):
    Admin = "admin"
    HOD = "hod"
    Student = "student"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        sa_column=Column(Uuid, primary_key=True)
    )

    name: str = Field(nullable=False)
    email: str = Field(nullable=False, index=True, unique=True)
    password_hash: str = Field(nullable=False)

    # stored by value ("student" / "hod" / "admin")
    role: UserRole = Field(
        default=UserRole.Student,
        sa_column=Column(
            SAEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
        )
    )

    department: Optional[str] = Field(
        default=None,
        sa_column=Column(String(128), nullable=True)
    )

    # interest tags, order preserved, no duplicates
    interests: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False)
    )

    avatar: Optional[str] = Field(
        default=None,
        sa_column=Column(String, nullable=True)
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
