from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from uuid import UUID

from app.models.user import UserRole
from app.schemas.user import UserRead


# -------------------------------------------------------------------
# IDENTITY (resolved from the bearer token, passed to every service)
# -------------------------------------------------------------------
class Identity(BaseModel):
    id: UUID
    role: UserRole
    name: Optional[str] = None
    department: Optional[str] = None

    class Config:
        frozen = True


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -------------------------------------------------------------------
# STUDENT SELF-REGISTRATION
# (no role field: public registration always creates a Student)
# -------------------------------------------------------------------
class StudentRegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    department: str = Field(min_length=1)
    interests: List[str] = []

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "name": "Aarav Patel",
                    "email": "aarav@student.com",
                    "password": "student123",
                    "department": "Computer Science",
                    "interests": ["Coding", "Hackathon", "AI/ML"]
                }
            ]
        }


# -------------------------------------------------------------------
# TOKEN + USER DETAILS (Used for login response)
# -------------------------------------------------------------------
class TokenWithUser(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: UserRead

    # dashboard the client should open for this role
    redirect_url: str
