# app/api/deps.py

from typing import AsyncGenerator, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import decode_token
from app.core.database import get_session
from app.schemas.auth import Identity
from app.services.auth_service import get_user_by_id, identity_from_user


# ------------------------------------------------------------
# HTTP Bearer Authentication
# ------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=False)


# ------------------------------------------------------------
# DB Session
# ------------------------------------------------------------
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ------------------------------------------------------------
# Resolve the bearer token into the caller's Identity
# ------------------------------------------------------------
async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db_session),
) -> Identity:

    if credentials is None:
        raise _unauthenticated("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthenticated("Token has expired")
    except jwt.InvalidTokenError:
        raise _unauthenticated("Could not validate credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthenticated("Invalid token payload")

    # role and department come from the stored account, not the token,
    # so deleted users and changed roles take effect immediately
    user = await get_user_by_id(session, user_id)
    if not user:
        raise _unauthenticated("User not found")

    return identity_from_user(user)
