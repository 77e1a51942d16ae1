import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from pydantic import BaseModel

from config import settings


class Principal(BaseModel):
    """Signed-in identity handed over by the identity provider."""
    uid: str
    email: Optional[str] = None
    displayName: Optional[str] = None
    photoURL: Optional[str] = None


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "iat": now})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify JWT access token"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        return payload
    except jwt.PyJWTError:
        return None


def principal_from_token(token: str) -> Optional[Principal]:
    """Verify token and return the principal it names, if valid"""
    payload = decode_access_token(token)
    if payload is None or not payload.get("uid"):
        return None
    return Principal(
        uid=payload["uid"],
        email=payload.get("email"),
        displayName=payload.get("name"),
        photoURL=payload.get("picture"),
    )


def default_user_id(email: str) -> str:
    """Suggest a library handle from the local part of an email address."""
    local_part = email.split("@")[0]
    return "".join(ch for ch in local_part if ch.isascii() and (ch.isalnum() or ch in "_-"))
