import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db, transaction
from ..models import User
from ..schemas.user import UserCreate, UserUpdate
from ..core.permissions import AuthContext, require_admin
from ..core.security import get_password_hash
from ..services.roles import create_user_with_profile, change_role, delete_user, normalize_email, PROFILE_FIELDS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def serialize_user(user: User) -> dict:
    profile = user.profile
    data = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "updated_at": user.updated_at.isoformat() if user.updated_at else None,
        "profile": None,
    }
    if profile is not None:
        data["profile"] = {"id": profile.id}
        for field in PROFILE_FIELDS[user.role]:
            data["profile"][field] = getattr(profile, field)
    return data


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("")
def list_users(
    id: Optional[int] = None,
    role: Optional[str] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    """List users, or one user with its profile when id is given"""
    if id is not None:
        return serialize_user(get_user_or_404(db, id))

    query = db.query(User)
    if role:
        query = query.filter(User.role == role.upper())
    return [serialize_user(u) for u in query.order_by(User.created_at.desc(), User.id.desc()).all()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    profile_fields = payload.model_dump(include={"bio", "bio_fa", "specialties", "phone", "photo"})
    with transaction(db):
        user = create_user_with_profile(
            db, payload.name, payload.email, payload.password, role=payload.role.upper(), **profile_fields
        )
    db.refresh(user)
    return serialize_user(user)


@router.put("")
def update_user(
    id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    """Update account fields; a role change swaps the profile"""
    user = get_user_or_404(db, id)
    data = payload.model_dump(exclude_unset=True)

    with transaction(db):
        if data.get("email"):
            email = normalize_email(data["email"])
            clash = db.query(User).filter(User.email == email, User.id != user.id).first()
            if clash:
                raise HTTPException(status_code=400, detail="User with this email already exists")
            user.email = email
        if data.get("name"):
            user.name = data["name"]
        if data.get("password"):
            user.password_hash = get_password_hash(data["password"])

        profile_fields = {k: v for k, v in data.items() if k in ("bio", "bio_fa", "specialties", "phone", "photo")}
        new_role = (data.get("role") or user.role).upper()
        if new_role != user.role:
            change_role(db, user, new_role, **profile_fields)
        elif user.profile is not None:
            for field, value in profile_fields.items():
                if field in PROFILE_FIELDS[user.role]:
                    setattr(user.profile, field, value)

    db.refresh(user)
    return serialize_user(user)


@router.delete("")
def remove_user(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    user = get_user_or_404(db, id)
    with transaction(db):
        delete_user(db, user, acting_user_id=auth.user_id)
    return {"success": True}
