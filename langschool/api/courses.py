import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db, transaction
from ..models import Course, Teacher
from ..schemas.course import CourseCreate, CourseUpdate, CourseResponse
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin, require_teacher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/courses", tags=["courses"])


def get_course_or_404(db: Session, course_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


def ensure_teacher_exists(db: Session, teacher_id: int):
    if not db.query(Teacher).filter(Teacher.id == teacher_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")


@router.get("")
def get_courses(
    id: Optional[int] = None,
    active: Optional[bool] = None,
    featured: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """Public course catalogue, newest first"""
    if id is not None:
        return CourseResponse.model_validate(get_course_or_404(db, id))

    query = db.query(Course)
    if active is not None:
        query = query.filter(Course.is_active == active)
    if featured:
        query = query.filter(Course.featured.is_(True))
    courses = query.order_by(Course.created_at.desc(), Course.id.desc()).all()
    return [CourseResponse.model_validate(c) for c in courses]


@router.get("/teacher")
def get_teacher_courses(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_teacher)
):
    """Courses taught by the calling teacher"""
    query = db.query(Course).filter(Course.teacher_id == auth.profile_id)
    if not include_inactive:
        query = query.filter(Course.is_active.is_(True))
    return [CourseResponse.model_validate(c) for c in query.order_by(Course.start_date.asc()).all()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    ensure_teacher_exists(db, payload.teacher_id)
    db_course = Course(**payload.model_dump(), admin_id=auth.profile_id)
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    logger.info("Course %s created by admin %s", db_course.id, auth.profile_id)
    return CourseResponse.model_validate(db_course)


@router.put("")
def update_course(
    id: int,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_course = get_course_or_404(db, id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("teacher_id") is not None:
        ensure_teacher_exists(db, data["teacher_id"])

    update_fields(db_course, data)

    db.commit()
    db.refresh(db_course)
    return CourseResponse.model_validate(db_course)


@router.delete("")
def delete_course(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Delete a course with its modules, lessons, assignments, submissions and enrollments"""
    db_course = get_course_or_404(db, id)
    with transaction(db):
        db.delete(db_course)
    logger.info("Course %s deleted by admin %s", id, auth.profile_id)
    return {"success": True}
