import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import Course, Student, Enrollment, EnrollmentStatus, Role
from ..schemas.course import EnrollmentCreate, EnrollmentUpdate, EnrollmentResponse
from ..core.permissions import AuthContext, get_auth_context, require_admin, require_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


def get_enrollment_or_404(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")
    return enrollment


@router.get("")
def get_enrollments(
    student_id: Optional[int] = None,
    course_id: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context)
):
    """Enrollments visible to the caller: all for admins, own courses for teachers, own for students"""
    query = db.query(Enrollment)
    if auth.role == Role.TEACHER:
        query = query.join(Course, Course.id == Enrollment.course_id).filter(Course.teacher_id == auth.profile_id)
    elif auth.role == Role.STUDENT:
        query = query.filter(Enrollment.student_id == auth.profile_id)

    if student_id is not None:
        query = query.filter(Enrollment.student_id == student_id)
    if course_id is not None:
        query = query.filter(Enrollment.course_id == course_id)

    return [EnrollmentResponse.model_validate(e) for e in query.order_by(Enrollment.enrolled_at.desc()).all()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_enrollment(
    payload: EnrollmentCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_role(Role.ADMIN, Role.STUDENT))
):
    """Admins enroll any student; students enroll themselves"""
    student_id = payload.student_id
    if auth.role == Role.STUDENT:
        if student_id is not None and student_id != auth.profile_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Students can only enroll themselves"
            )
        student_id = auth.profile_id

    if not student_id or not payload.course_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Student ID and Course ID are required")

    if not db.query(Student).filter(Student.id == student_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

    course = db.query(Course).filter(Course.id == payload.course_id, Course.is_active.is_(True)).first()
    if not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found or inactive")

    existing = db.query(Enrollment).filter(
        Enrollment.student_id == student_id,
        Enrollment.course_id == course.id
    ).first()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Student is already enrolled in this course")

    active_count = db.query(Enrollment).filter(
        Enrollment.course_id == course.id,
        Enrollment.status == EnrollmentStatus.ACTIVE
    ).count()
    if active_count >= course.capacity:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Course is full")

    db_enrollment = Enrollment(student_id=student_id, course_id=course.id, status=EnrollmentStatus.ACTIVE)
    db.add(db_enrollment)
    db.commit()
    db.refresh(db_enrollment)
    logger.info("Student %s enrolled in course %s", student_id, course.id)
    return EnrollmentResponse.model_validate(db_enrollment)


@router.put("")
def update_enrollment(
    id: int,
    payload: EnrollmentUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_enrollment = get_enrollment_or_404(db, id)
    new_status = payload.status.upper()
    if new_status not in EnrollmentStatus.ALL:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid enrollment status")
    db_enrollment.status = new_status
    db.commit()
    db.refresh(db_enrollment)
    return EnrollmentResponse.model_validate(db_enrollment)


@router.delete("")
def delete_enrollment(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_enrollment = get_enrollment_or_404(db, id)
    db.delete(db_enrollment)
    db.commit()
    return {"success": True}
