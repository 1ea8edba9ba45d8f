import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from ..config import settings
from ..database import get_db
from ..models.user import User, UserSession, Role
from .errors import ProfileMissing
from .security import verify_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Who is calling, resolved once per request."""
    user_id: int
    email: str
    role: str
    profile_id: int
    source: str = "token"  # "token" or "session"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT


def _user_from_session(session_token: str, db: Session) -> Optional[User]:
    session = db.query(UserSession).filter(UserSession.token == session_token).first()
    if session is None:
        return None
    if session.expires_at < datetime.utcnow():
        logger.debug("Session %s expired", session.id)
        return None
    return session.user


def resolve_identity(request: Request, credentials: Optional[HTTPAuthorizationCredentials], db: Session):
    """Return (user, source) from the bearer token, else the session cookie.

    A bad token counts as no token. Returns (None, None) when neither works.
    """
    if credentials and credentials.credentials:
        claims = verify_token(credentials.credentials)
        if claims is not None:
            user = db.query(User).filter(User.id == claims["id"]).first()
            if user is None:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="User not found",
                    headers={"WWW-Authenticate": "Bearer"},
                )
            return user, "token"
        logger.debug("Bearer token rejected, falling back to session")

    session_token = request.cookies.get(settings.session_cookie_name)
    if session_token:
        user = _user_from_session(session_token, db)
        if user is not None:
            return user, "session"

    return None, None


def build_auth_context(user: User, source: str) -> AuthContext:
    profile = user.profile
    if profile is None:
        logger.warning("User %s has role %s but no matching profile", user.id, user.role)
        raise ProfileMissing(user.role)
    return AuthContext(
        user_id=user.id,
        email=user.email,
        role=user.role,
        profile_id=profile.id,
        source=source,
    )


def get_auth_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> AuthContext:
    """Authenticate the request from the Authorization header or session cookie."""
    user, source = resolve_identity(request, credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return build_auth_context(user, source)


def get_optional_auth_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[AuthContext]:
    """Like get_auth_context but anonymous callers get None."""
    user, source = resolve_identity(request, credentials, db)
    if user is None:
        return None
    return build_auth_context(user, source)


def require_role(*roles: str):
    """Dependency factory allowing only the given roles"""
    label = " or ".join(role.lower() for role in roles)

    def role_checker(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if auth.role not in roles:
            logger.info("User %s (%s) refused: %s access required", auth.user_id, auth.role, label)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not authorized - {label} access required"
            )
        return auth
    return role_checker


require_admin = require_role(Role.ADMIN)
require_teacher = require_role(Role.TEACHER)
require_student = require_role(Role.STUDENT)
require_teacher_or_student = require_role(Role.TEACHER, Role.STUDENT)
