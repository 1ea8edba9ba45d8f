import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from ..config import settings
from ..database import get_db, transaction
from ..models import User, UserSession, Role, Admin
from ..schemas.user import (
    RegisterRequest, LoginRequest, LoginResponse, TokenRefreshResponse, UserSummary,
    PasswordResetRequest, PasswordResetConfirm
)
from ..core.security import (
    verify_password, get_password_hash, create_user_token,
    new_session_token, session_expiry, reset_token_expiry
)
from ..core.permissions import AuthContext, get_auth_context, resolve_identity, security
from ..services.roles import create_user_with_profile, normalize_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])

# Roles anyone may pick when signing up
SELF_SERVICE_ROLES = (Role.STUDENT, Role.TEACHER)

RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset link has been sent."


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user with the profile for its role"""
    if not payload.name or not payload.email or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, email and password are required"
        )

    role = (payload.role or Role.STUDENT).upper()
    if role not in SELF_SERVICE_ROLES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role")

    with transaction(db):
        user = create_user_with_profile(db, payload.name, payload.email, payload.password, role=role)

    return {
        "message": "User registered successfully",
        "user": UserSummary.model_validate(user),
    }


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Check credentials, open a server-side session and issue a bearer token"""
    user = db.query(User).filter(User.email == normalize_email(payload.email)).first()

    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = UserSession(token=new_session_token(), user_id=user.id, expires_at=session_expiry())
    with transaction(db):
        db.add(session)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        httponly=True,
        samesite="lax",
        max_age=settings.session_expire_hours * 3600,
    )
    access_token = create_user_token(user, expires_delta=timedelta(minutes=settings.access_token_expire_minutes))
    return {"user": UserSummary.model_validate(user), "token": access_token}


@router.post("/logout")
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    session_token = request.cookies.get(settings.session_cookie_name)
    if session_token:
        with transaction(db):
            db.query(UserSession).filter(UserSession.token == session_token).delete()
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True}


@router.post("/refresh", response_model=TokenRefreshResponse)
def refresh_token(auth: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)):
    """Issue a fresh token for the current user"""
    user = db.query(User).filter(User.id == auth.user_id).first()
    return {"token": create_user_token(user), "success": True}


@router.get("/me")
def get_current_user_info(auth: AuthContext = Depends(get_auth_context), db: Session = Depends(get_db)):
    """Get current user information"""
    user = db.query(User).filter(User.id == auth.user_id).first()
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "profile_id": auth.profile_id,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


@router.get("/status")
def auth_status(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
):
    """Report how (and whether) this request is authenticated.

    Admin profiles are only listed for admins.
    """
    user, source = resolve_identity(request, credentials, db)
    is_admin = bool(user and user.role == Role.ADMIN)
    admins = db.query(Admin).all() if is_admin else []
    return {
        "authenticated": user is not None,
        "session_auth": source == "session",
        "token_auth": source == "token",
        "user": UserSummary.model_validate(user) if user else None,
        "has_admin_profile": bool(user and user.admin_profile),
        "has_profile": bool(user and user.profile),
        "admin_profiles": [
            {"id": admin.id, "user_id": admin.user_id, "email": admin.user.email}
            for admin in admins
        ],
    }


@router.post("/reset-password")
def request_password_reset(payload: PasswordResetRequest, db: Session = Depends(get_db)):
    """Issue a reset token valid for one hour.

    The answer is the same whether or not the email belongs to an account.
    With DEBUG on, the token and link are echoed back since no mail is sent.
    """
    if not payload.email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required")

    body = {"success": True, "message": RESET_REQUESTED_MESSAGE}
    user = db.query(User).filter(User.email == normalize_email(payload.email)).first()
    if not user:
        logger.info("Password reset requested for unknown email")
        return body

    with transaction(db):
        user.reset_token = new_session_token()
        user.reset_token_expiry = reset_token_expiry()
    logger.info("Password reset token issued for user %s", user.id)

    if settings.debug:
        body["debug"] = {
            "reset_token": user.reset_token,
            "reset_link": f"{settings.public_app_url}/reset-password?token={user.reset_token}",
        }
    return body


@router.put("/reset-password")
def reset_password(payload: PasswordResetConfirm, db: Session = Depends(get_db)):
    """Set a new password with a reset token; open sessions are closed"""
    if not payload.token or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token and password are required")

    user = db.query(User).filter(
        User.reset_token == payload.token,
        User.reset_token_expiry > datetime.utcnow()
    ).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired token")

    with transaction(db):
        user.password_hash = get_password_hash(payload.password)
        user.reset_token = None
        user.reset_token_expiry = None
        db.query(UserSession).filter(UserSession.user_id == user.id).delete(synchronize_session=False)
    logger.info("Password reset for user %s", user.id)
    return {"success": True, "message": "Password has been reset successfully."}
