from datetime import datetime, timedelta, timezone

import jwt

from staff_directory.core import config
from staff_directory.models.user import AuthUser, Role


def create_access_token(user: AuthUser, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "username": user.username,
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )


def user_from_claims(payload: dict) -> AuthUser:
    """Build the caller identity from verified claims; raises ValueError on malformed claims."""
    user_id = payload.get("sub")
    username = payload.get("username")
    if not user_id or not username:
        raise ValueError("Token is missing identity claims")
    return AuthUser(id=str(user_id), username=str(username), role=Role(payload.get("role")))
