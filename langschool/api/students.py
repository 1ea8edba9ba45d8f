import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db, transaction
from ..models import User, Student, Role, Course, Enrollment
from ..schemas.profile import StudentCreate, StudentUpdate, StudentResponse
from ..core.errors import ApiError
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin, require_teacher
from ..services.roles import change_role, delete_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/students", tags=["students"])


def get_student_or_404(db: Session, student_id: int) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student not found with ID: {student_id}")
    return student


@router.get("")
def get_students(id: Optional[int] = None, db: Session = Depends(get_db)):
    """Students with their enrollments, course and teacher name"""
    if id is not None:
        return StudentResponse.model_validate(get_student_or_404(db, id))
    students = db.query(Student).join(User).order_by(User.name.asc()).all()
    return [StudentResponse.model_validate(s) for s in students]


@router.get("/teacher")
def get_my_students(db: Session = Depends(get_db), auth: AuthContext = Depends(require_teacher)):
    """Students enrolled in any of the calling teacher's courses"""
    students = (
        db.query(Student)
        .join(Enrollment, Enrollment.student_id == Student.id)
        .join(Course, Course.id == Enrollment.course_id)
        .filter(Course.teacher_id == auth.profile_id)
        .distinct()
        .all()
    )
    return [StudentResponse.model_validate(s) for s in students]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    if not payload.user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID is required")

    user = db.query(User).filter(User.id == payload.user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.role == Role.STUDENT and user.student_profile is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already a student")

    with transaction(db):
        student = change_role(db, user, Role.STUDENT, phone=payload.phone, photo=payload.photo)
    db.refresh(student)
    return StudentResponse.model_validate(student)


@router.put("")
def update_student(
    id: int,
    payload: StudentUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    student = get_student_or_404(db, id)
    update_fields(student, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(student)
    return StudentResponse.model_validate(student)


@router.delete("")
def delete_student(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Delete a student account that has no enrollments left"""
    student = get_student_or_404(db, id)
    if student.enrollments:
        raise ApiError(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student has active enrollments. Please unenroll the student from courses first.",
            extra={"enrollments": [{"id": e.id, "course_id": e.course_id} for e in student.enrollments]},
        )

    with transaction(db):
        delete_user(db, student.user, acting_user_id=auth.user_id)
    return {"success": True}
