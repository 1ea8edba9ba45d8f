from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from .user import UserSummary
from .course import CourseBrief, EnrollmentBrief


# Teacher schemas
class TeacherCreate(BaseModel):
    user_id: Optional[int] = None
    bio: Optional[str] = None
    bio_fa: Optional[str] = None
    specialties: Optional[str] = None
    photo: Optional[str] = None


class TeacherUpdate(BaseModel):
    bio: Optional[str] = None
    bio_fa: Optional[str] = None
    specialties: Optional[str] = None
    photo: Optional[str] = None


class TeacherResponse(BaseModel):
    id: int
    user_id: int
    bio: str
    bio_fa: Optional[str] = None
    specialties: Optional[str] = None
    photo: Optional[str] = None
    user: UserSummary
    courses: List[CourseBrief] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Student schemas
class StudentCreate(BaseModel):
    user_id: Optional[int] = None
    phone: Optional[str] = None
    photo: Optional[str] = None


class StudentUpdate(BaseModel):
    phone: Optional[str] = None
    photo: Optional[str] = None


class StudentResponse(BaseModel):
    id: int
    user_id: int
    phone: Optional[str] = None
    photo: Optional[str] = None
    user: UserSummary
    enrollments: List[EnrollmentBrief] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
