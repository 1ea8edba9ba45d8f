import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db, transaction
from ..models import Assignment, Course, Enrollment, EnrollmentStatus, Role
from ..schemas.assignment import AssignmentCreate, AssignmentUpdate, AssignmentResponse, AssignmentDetail
from ..core.permissions import AuthContext, get_auth_context, require_teacher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/assignments", tags=["assignments"])

REQUIRED_FIELDS = ("title", "title_fa", "due_date", "course_id")


def get_own_course(db: Session, course_id: int, teacher_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id, Course.teacher_id == teacher_id).first()
    if not course:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course not found or does not belong to this teacher"
        )
    return course


def get_own_assignment(db: Session, assignment_id: int, teacher_id: int) -> Assignment:
    assignment = db.query(Assignment).filter(
        Assignment.id == assignment_id,
        Assignment.teacher_id == teacher_id
    ).first()
    if not assignment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assignment not found or does not belong to this teacher"
        )
    return assignment


def visible_assignments(db: Session, auth: AuthContext):
    query = db.query(Assignment)
    if auth.role == Role.TEACHER:
        query = query.filter(Assignment.teacher_id == auth.profile_id)
    elif auth.role == Role.STUDENT:
        query = query.join(Enrollment, Enrollment.course_id == Assignment.course_id).filter(
            Enrollment.student_id == auth.profile_id,
            Enrollment.status == EnrollmentStatus.ACTIVE
        )
    return query


@router.get("")
def get_assignments(
    id: Optional[int] = None,
    course_id: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context)
):
    """Assignments visible to the caller, earliest due first"""
    query = visible_assignments(db, auth)
    if id is not None:
        assignment = query.filter(Assignment.id == id).first()
        if not assignment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")
        detail = AssignmentDetail.model_validate(assignment)
        if auth.role == Role.STUDENT:
            # students only see their own submission
            detail.submissions = [s for s in detail.submissions if s.student_id == auth.profile_id]
        return detail

    if course_id is not None:
        query = query.filter(Assignment.course_id == course_id)
    assignments = query.order_by(Assignment.due_date.asc()).all()
    return {"assignments": [AssignmentResponse.model_validate(a) for a in assignments]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_teacher)
):
    missing = [field for field in REQUIRED_FIELDS if not getattr(payload, field)]
    if missing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    get_own_course(db, payload.course_id, auth.profile_id)

    db_assignment = Assignment(**payload.model_dump(), teacher_id=auth.profile_id)
    db.add(db_assignment)
    db.commit()
    db.refresh(db_assignment)
    logger.info("Assignment %s created by teacher %s", db_assignment.id, auth.profile_id)
    return AssignmentResponse.model_validate(db_assignment)


@router.put("")
def update_assignment(
    id: int,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_teacher)
):
    db_assignment = get_own_assignment(db, id, auth.profile_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("course_id") is not None:
        get_own_course(db, data["course_id"], auth.profile_id)

    for field, value in data.items():
        if value is not None:
            setattr(db_assignment, field, value)

    db.commit()
    db.refresh(db_assignment)
    return AssignmentResponse.model_validate(db_assignment)


@router.delete("")
def delete_assignment(id: Optional[int] = None, db: Session = Depends(get_db), auth: AuthContext = Depends(require_teacher)):
    """Delete an assignment together with its submissions"""
    if id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Assignment ID is required")
    db_assignment = get_own_assignment(db, id, auth.profile_id)
    with transaction(db):
        for submission in list(db_assignment.submissions):
            db.delete(submission)
        db.delete(db_assignment)
    return {"success": True}
