from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime, timezone
from .course import CourseBrief, StudentBrief


# Assignment schemas
class AssignmentCreate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None
    due_date: Optional[datetime] = None
    course_id: Optional[int] = None

    @field_validator("due_date")
    @classmethod
    def due_date_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # due dates are stored as naive UTC
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class AssignmentUpdate(AssignmentCreate):
    pass


class AssignmentBrief(BaseModel):
    id: int
    title: str
    title_fa: str
    due_date: datetime
    course_id: int

    class Config:
        from_attributes = True


class AssignmentResponse(BaseModel):
    id: int
    title: str
    title_fa: str
    description: Optional[str] = None
    description_fa: Optional[str] = None
    due_date: datetime
    course_id: int
    teacher_id: int
    course: CourseBrief
    submission_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Submission schemas
class SubmissionCreate(BaseModel):
    assignment_id: Optional[int] = None
    content: Optional[str] = None
    attachment_url: Optional[str] = None


class SubmissionUpdate(BaseModel):
    # student fields
    content: Optional[str] = None
    attachment_url: Optional[str] = None
    # teacher fields
    grade: Optional[float] = None
    feedback: Optional[str] = None


class SubmissionResponse(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    content: str
    attachment_url: Optional[str] = None
    submitted_at: datetime
    is_late: bool
    status: str
    grade: Optional[float] = None
    feedback: Optional[str] = None
    graded_at: Optional[datetime] = None
    student: Optional[StudentBrief] = None
    assignment: Optional[AssignmentBrief] = None

    class Config:
        from_attributes = True


class AssignmentDetail(AssignmentResponse):
    submissions: List[SubmissionResponse] = []
