from ..database import Base
from .user import User, UserSession, Role
from .profile import Admin, Teacher, Student
from .course import Course, CourseModule, Lesson, Enrollment, EnrollmentStatus
from .assignment import Assignment, Submission, SubmissionStatus
from .content import (
    Post,
    Category,
    post_categories,
    HeroSlide,
    FeatureItem,
    Statistic,
    Charter,
    GlobalSetting,
    AboutPage
)

__all__ = [
    "Base",
    "User",
    "UserSession",
    "Role",
    # Profiles
    "Admin",
    "Teacher",
    "Student",
    # Courses
    "Course",
    "CourseModule",
    "Lesson",
    "Enrollment",
    "EnrollmentStatus",
    "Assignment",
    "Submission",
    "SubmissionStatus",
    # Site content
    "Post",
    "Category",
    "post_categories",
    "HeroSlide",
    "FeatureItem",
    "Statistic",
    "Charter",
    "GlobalSetting",
    "AboutPage"
]
