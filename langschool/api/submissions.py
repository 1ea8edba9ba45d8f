import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import Assignment, Submission, SubmissionStatus, Enrollment, EnrollmentStatus, Role
from ..schemas.assignment import SubmissionCreate, SubmissionUpdate, SubmissionResponse
from ..core.errors import ApiError
from ..core.permissions import AuthContext, require_student, require_teacher_or_student

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submissions", tags=["submissions"])


def is_late(due_date: datetime, when: Optional[datetime] = None) -> bool:
    return (when or datetime.utcnow()) > due_date


def get_submission_or_404(db: Session, submission_id: int) -> Submission:
    submission = db.query(Submission).filter(Submission.id == submission_id).first()
    if not submission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    return submission


def ensure_student_can_modify(submission: Submission, auth: AuthContext, action: str):
    if submission.student_id != auth.profile_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You do not have permission to {action} this submission"
        )
    if submission.grade is not None or submission.status == SubmissionStatus.GRADED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot {action} a submission that has already been graded"
        )


@router.get("")
def get_submissions(
    id: Optional[int] = None,
    assignment_id: Optional[int] = None,
    student_id: Optional[int] = None,
    course_id: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_teacher_or_student)
):
    """Teachers see submissions to their assignments, students their own"""
    query = db.query(Submission).join(Assignment, Assignment.id == Submission.assignment_id)
    if auth.role == Role.TEACHER:
        query = query.filter(Assignment.teacher_id == auth.profile_id)
        if student_id is not None:
            query = query.filter(Submission.student_id == student_id)
    else:
        query = query.filter(Submission.student_id == auth.profile_id)

    if id is not None:
        submission = query.filter(Submission.id == id).first()
        if not submission:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
        return SubmissionResponse.model_validate(submission)

    if assignment_id is not None:
        query = query.filter(Submission.assignment_id == assignment_id)
    if course_id is not None:
        query = query.filter(Assignment.course_id == course_id)

    submissions = query.order_by(Submission.submitted_at.desc()).all()
    return {"submissions": [SubmissionResponse.model_validate(s) for s in submissions]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_submission(
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_student)
):
    if not payload.assignment_id or not payload.content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    assignment = db.query(Assignment).filter(Assignment.id == payload.assignment_id).first()
    if not assignment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")

    enrollment = db.query(Enrollment).filter(
        Enrollment.student_id == auth.profile_id,
        Enrollment.course_id == assignment.course_id,
        Enrollment.status == EnrollmentStatus.ACTIVE
    ).first()
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are not enrolled in this course")

    existing = db.query(Submission).filter(
        Submission.assignment_id == assignment.id,
        Submission.student_id == auth.profile_id
    ).first()
    if existing:
        raise ApiError(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You have already submitted this assignment",
            extra={"existing_submission_id": existing.id},
        )

    now = datetime.utcnow()
    db_submission = Submission(
        assignment_id=assignment.id,
        student_id=auth.profile_id,
        content=payload.content,
        attachment_url=payload.attachment_url,
        submitted_at=now,
        is_late=is_late(assignment.due_date, now),
        status=SubmissionStatus.SUBMITTED,
    )
    db.add(db_submission)
    db.commit()
    db.refresh(db_submission)
    return SubmissionResponse.model_validate(db_submission)


@router.put("")
def update_submission(
    id: int,
    payload: SubmissionUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_teacher_or_student)
):
    """Teachers grade; students edit their ungraded work"""
    db_submission = get_submission_or_404(db, id)

    if auth.role == Role.TEACHER:
        if db_submission.assignment.teacher_id != auth.profile_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to grade this submission"
            )
        if payload.grade is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Grade is required")
        if payload.grade < 0 or payload.grade > 100:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Grade must be between 0 and 100")

        db_submission.grade = payload.grade
        db_submission.feedback = payload.feedback
        db_submission.graded_at = datetime.utcnow()
        db_submission.status = SubmissionStatus.GRADED
        logger.info("Submission %s graded by teacher %s", db_submission.id, auth.profile_id)
    else:
        ensure_student_can_modify(db_submission, auth, "update")
        if payload.content is not None:
            db_submission.content = payload.content
        if payload.attachment_url is not None:
            db_submission.attachment_url = payload.attachment_url
        now = datetime.utcnow()
        db_submission.submitted_at = now
        db_submission.is_late = is_late(db_submission.assignment.due_date, now)

    db.commit()
    db.refresh(db_submission)
    return SubmissionResponse.model_validate(db_submission)


@router.delete("")
def delete_submission(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_student)):
    db_submission = get_submission_or_404(db, id)
    ensure_student_can_modify(db_submission, auth, "delete")
    db.delete(db_submission)
    db.commit()
    return {"success": True}
