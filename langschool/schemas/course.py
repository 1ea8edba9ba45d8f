from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from .user import UserName, UserSummary


class TeacherName(BaseModel):
    id: int
    user: UserName

    class Config:
        from_attributes = True


class CourseBrief(BaseModel):
    id: int
    title: str
    title_fa: str
    level: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = True
    teacher: Optional[TeacherName] = None

    class Config:
        from_attributes = True


# Course schemas
class CourseBase(BaseModel):
    title: str
    title_fa: str
    description: str
    description_fa: str
    price: float = 0
    thumbnail: Optional[str] = None
    level: Optional[str] = None
    is_active: bool = True
    featured: bool = False
    capacity: int
    start_date: datetime
    end_date: datetime
    time_slot: str
    location: str
    teacher_id: int


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None
    price: Optional[float] = None
    thumbnail: Optional[str] = None
    level: Optional[str] = None
    is_active: Optional[bool] = None
    featured: Optional[bool] = None
    capacity: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    time_slot: Optional[str] = None
    location: Optional[str] = None
    teacher_id: Optional[int] = None


class CourseResponse(CourseBase):
    id: int
    admin_id: Optional[int] = None
    teacher: Optional[TeacherName] = None
    module_count: int = 0
    enrollment_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Module and lesson schemas
class ModuleBase(BaseModel):
    title: str
    title_fa: str
    description: Optional[str] = None
    description_fa: Optional[str] = None


class ModuleCreate(ModuleBase):
    course_id: int


class ModuleUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    description: Optional[str] = None
    description_fa: Optional[str] = None


class ModuleResponse(ModuleBase):
    id: int
    course_id: int
    order_index: int
    version: int
    lesson_count: int = 0

    class Config:
        from_attributes = True


class LessonBase(BaseModel):
    title: str
    title_fa: str
    content: Optional[str] = None
    content_fa: Optional[str] = None
    duration: Optional[int] = None


class LessonCreate(LessonBase):
    module_id: int


class LessonUpdate(BaseModel):
    title: Optional[str] = None
    title_fa: Optional[str] = None
    content: Optional[str] = None
    content_fa: Optional[str] = None
    duration: Optional[int] = None


class LessonResponse(LessonBase):
    id: int
    module_id: int
    order_index: int
    version: int

    class Config:
        from_attributes = True


# Enrollment schemas
class StudentBrief(BaseModel):
    id: int
    user: UserSummary

    class Config:
        from_attributes = True


class EnrollmentCreate(BaseModel):
    student_id: Optional[int] = None
    course_id: Optional[int] = None


class EnrollmentUpdate(BaseModel):
    status: str


class EnrollmentBrief(BaseModel):
    id: int
    course_id: int
    status: str
    enrolled_at: Optional[datetime] = None
    course: CourseBrief

    class Config:
        from_attributes = True


class EnrollmentResponse(BaseModel):
    id: int
    student_id: int
    course_id: int
    status: str
    enrolled_at: Optional[datetime] = None
    student: StudentBrief
    course: CourseBrief

    class Config:
        from_attributes = True
