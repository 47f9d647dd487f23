# app/services/auth_service.py

from sqlmodel import select
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from loguru import logger
import uuid
from typing import Iterable, List, Optional

from app.models.user import User, UserRole, utcnow
from app.models.event import Event
from app.models.event_registration import EventRegistration
from app.core.config import settings
from app.core.constants import DASHBOARD_BY_ROLE
from app.core.exceptions import NotFound, ValidationFailed
from app.core.rbac import Operation, authorize
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
)
from app.schemas.auth import Identity, StudentRegisterRequest, TokenWithUser
from app.schemas.user import HodCreate, UserRead


def _as_uuid(value) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Trim, drop blanks, de-duplicate; first occurrence wins."""
    seen = []
    for tag in tags or []:
        tag = (tag or "").strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


# ============================================================================
# FETCH USER BY EMAIL
# ============================================================================
async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


# ============================================================================
# FETCH USER BY ID
# ============================================================================
async def get_user_by_id(session: AsyncSession, user_id, lock: bool = False) -> User | None:
    try:
        user_uuid = _as_uuid(user_id)
    except ValueError:
        return None

    query = select(User).where(User.id == user_uuid)
    if lock:
        query = query.with_for_update()

    result = await session.execute(query)
    return result.scalar_one_or_none()


def identity_from_user(user: User) -> Identity:
    return Identity(id=user.id, role=user.role, name=user.name, department=user.department)


# ============================================================================
# CREATE USER
# ============================================================================
async def create_user(
    session: AsyncSession,
    name: str,
    email: str,
    password: str,
    role: UserRole,
    department: str | None = None,
    interests: Iterable[str] | None = None,
) -> User:

    # HODs are always attached to a department
    if role == UserRole.HOD and not department:
        raise ValidationFailed("HOD must belong to a department")

    if await get_user_by_email(session, email):
        raise ValidationFailed("Email already registered")

    user = User(
        id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        department=department,
        interests=normalize_tags(interests or []),
    )

    session.add(user)

    try:
        await session.commit()
        await session.refresh(user)
    except IntegrityError:
        # lost a race against a concurrent insert with the same email
        await session.rollback()
        raise ValidationFailed("Email already registered")

    logger.info(f"Created {role.value} account {email}")
    return user


# ============================================================================
# STUDENT SELF-REGISTRATION (role is always Student)
# ============================================================================
async def register_student(session: AsyncSession, data: StudentRegisterRequest) -> User:
    return await create_user(
        session=session,
        name=data.name,
        email=data.email,
        password=data.password,
        role=UserRole.Student,
        department=data.department,
        interests=data.interests,
    )


# ============================================================================
# ADMIN: CREATE HOD (role is always HOD)
# ============================================================================
async def create_hod(session: AsyncSession, identity: Identity, data: HodCreate) -> User:
    authorize(identity, Operation.CreateHod)

    return await create_user(
        session=session,
        name=data.name,
        email=data.email,
        password=data.password or settings.DEFAULT_HOD_PASSWORD,
        role=UserRole.HOD,
        department=data.department,
    )


# ============================================================================
# AUTHENTICATE (email + password)
# ============================================================================
async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


# ============================================================================
# CREATE LOGIN RESPONSE
# ============================================================================
def create_login_response(user: User) -> TokenWithUser:
    # JWT carries the identity the rest of the API works with
    token = create_access_token(
        subject=str(user.id),
        data={
            "role": user.role.value,
            "department": user.department,
        },
    )

    return TokenWithUser(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserRead.model_validate(user),
        redirect_url=DASHBOARD_BY_ROLE[user.role],
    )


# ============================================================================
# PROFILE
# ============================================================================
async def get_profile(session: AsyncSession, identity: Identity) -> User:
    authorize(identity, Operation.ViewProfile)

    user = await get_user_by_id(session, identity.id)
    if not user:
        raise NotFound("User not found")
    return user


# ============================================================================
# STUDENT: REPLACE INTERESTS (full overwrite, not merge)
# ============================================================================
async def update_interests(session: AsyncSession, identity: Identity, interests: List[str]) -> User:
    authorize(identity, Operation.UpdateInterests)

    user = await get_user_by_id(session, identity.id)
    if not user:
        raise NotFound("User not found")

    user.interests = normalize_tags(interests)
    user.updated_at = utcnow()
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


# ============================================================================
# LIST USERS (optionally by role, newest first)
# ============================================================================
async def list_users(
    session: AsyncSession,
    identity: Identity,
    role: Optional[UserRole] = None,
) -> list[User]:
    authorize(identity, Operation.ListUsers)

    query = select(User).order_by(User.created_at.desc())
    if role:
        query = query.where(User.role == role)

    result = await session.execute(query)
    return result.scalars().all()


# ============================================================================
# DELETE USER (cascades out of every registration list)
# ============================================================================
async def delete_user_by_id(session: AsyncSession, identity: Identity, user_id) -> User | None:
    """
    Returns the deleted user, or None when no such user exists.
    The registration cleanup, the count adjustment and the user delete
    commit together.
    """
    authorize(identity, Operation.DeleteUser)

    # the row lock holds off new registrations for this user until commit
    user = await get_user_by_id(session, user_id, lock=True)
    if not user:
        return None

    # decrement exactly the events whose rows this statement removed
    removed = await session.execute(
        delete(EventRegistration)
        .where(EventRegistration.user_id == user.id)
        .returning(EventRegistration.event_id)
        .execution_options(synchronize_session=False)
    )
    event_ids = [row[0] for row in removed.all()]

    if event_ids:
        await session.execute(
            update(Event)
            .where(Event.id.in_(event_ids))
            .values(registered_count=Event.registered_count - 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )

    # events organized by a removed HOD stay, without an organizer
    await session.execute(
        update(Event)
        .where(Event.organizer_id == user.id)
        .values(organizer_id=None)
        .execution_options(synchronize_session=False)
    )

    await session.delete(user)
    await session.commit()

    logger.info(f"Deleted user {user.email} ({user.role.value})")
    return user
