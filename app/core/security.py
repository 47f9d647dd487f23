# app/core/security.py
import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

import jwt
from passlib.context import CryptContext
from app.core.config import settings

# 1. Configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)
ALGORITHM = "HS256"

# 2. Password Handling
def _pre_hash_password(password: str) -> str:
    """
    Handle the bcrypt 72-byte limit.
    Passwords longer than 72 bytes are SHA-256 hashed first (64 hex chars),
    so every byte of the original password still matters.
    """
    if len(password.encode('utf-8')) <= 72:
        return password

    return hashlib.sha256(password.encode('utf-8')).hexdigest()

def hash_password(password: str) -> str:
    safe_password = _pre_hash_password(password)
    return pwd_context.hash(safe_password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    safe_password = _pre_hash_password(plain_password)
    return pwd_context.verify(safe_password, hashed_password)

# 3. Token Creation
def create_access_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None,
    data: Optional[dict] = None
) -> str:

    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "iat": now,
        "nbf": now,
    }

    if data:
        to_encode.update(data)

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)

# 4. Decoding (raises jwt.InvalidTokenError / jwt.ExpiredSignatureError)
def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[ALGORITHM],
        options={"verify_exp": True}
    )
