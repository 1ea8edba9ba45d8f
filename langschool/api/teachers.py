import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db, transaction
from ..models import User, Teacher, Role
from ..schemas.profile import TeacherCreate, TeacherUpdate, TeacherResponse
from ..core.errors import ApiError
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin
from ..services.roles import change_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teachers", tags=["teachers"])


def get_teacher_or_404(db: Session, teacher_id: int) -> Teacher:
    teacher = db.query(Teacher).filter(Teacher.id == teacher_id).first()
    if not teacher:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return teacher


@router.get("")
def get_teachers(id: Optional[int] = None, db: Session = Depends(get_db)):
    """Public teacher directory"""
    if id is not None:
        return TeacherResponse.model_validate(get_teacher_or_404(db, id))
    teachers = db.query(Teacher).join(User).order_by(User.name.asc()).all()
    return [TeacherResponse.model_validate(t) for t in teachers]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Turn an existing user into a teacher"""
    if not payload.user_id or not payload.bio:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID and bio are required")

    user = db.query(User).filter(User.id == payload.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.role == Role.TEACHER and user.teacher_profile is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already a teacher")

    with transaction(db):
        teacher = change_role(db, user, Role.TEACHER, **payload.model_dump(exclude={"user_id"}))
    db.refresh(teacher)
    return TeacherResponse.model_validate(teacher)


@router.put("")
def update_teacher(
    id: int,
    payload: TeacherUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    teacher = get_teacher_or_404(db, id)
    update_fields(teacher, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(teacher)
    return TeacherResponse.model_validate(teacher)


@router.delete("")
def delete_teacher(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Remove the teacher profile; the account stays as a student"""
    teacher = get_teacher_or_404(db, id)
    if teacher.courses:
        raise ApiError(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Teacher has assigned courses. Please reassign or delete these courses first.",
            extra={"courses": [{"id": c.id, "title": c.title} for c in teacher.courses]},
        )

    user = teacher.user
    with transaction(db):
        change_role(db, user, Role.STUDENT)
    return {"success": True}
