import secrets
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from ..config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

REQUIRED_CLAIMS = ("id", "email", "role")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Create JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def create_user_token(user, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token(
        {"id": user.id, "email": user.email, "role": user.role},
        expires_delta=expires_delta,
    )


def verify_token(token: str) -> Optional[dict]:
    """Verify JWT token and return its identity claims, or None if unusable"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if any(payload.get(claim) is None for claim in REQUIRED_CLAIMS):
        return None
    return payload


def new_session_token() -> str:
    return secrets.token_urlsafe(48)


def session_expiry() -> datetime:
    return datetime.utcnow() + timedelta(hours=settings.session_expire_hours)


def reset_token_expiry() -> datetime:
    return datetime.utcnow() + timedelta(minutes=settings.reset_token_expire_minutes)
