# app/api/endpoints/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_identity
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.schemas.auth import Identity, LoginRequest, StudentRegisterRequest, TokenWithUser
from app.schemas.user import UserRead
from app.services.auth_service import (
    authenticate_user,
    create_login_response,
    get_profile,
    register_student,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# -------------------------------------------------------------------
# LOGIN (all roles)
# -------------------------------------------------------------------
@router.post("/login", response_model=TokenWithUser)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session)
):
    user = await authenticate_user(session, payload.email, payload.password)

    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    return create_login_response(user)


# -------------------------------------------------------------------
# STUDENT SELF-REGISTRATION (PUBLIC, role forced to Student)
# -------------------------------------------------------------------
@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def register(
    request: Request,
    data: StudentRegisterRequest,
    session: AsyncSession = Depends(get_db_session),
):
    return await register_student(session, data)


# -------------------------------------------------------------------
# CURRENT USER PROFILE
# -------------------------------------------------------------------
@router.get("/me", response_model=UserRead)
async def me(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
):
    return await get_profile(session, identity)
