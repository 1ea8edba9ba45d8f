from .user import (
    UserName, UserSummary, UserCreate, UserUpdate, UserResponse,
    RegisterRequest, LoginRequest, LoginResponse, TokenRefreshResponse,
    PasswordResetRequest, PasswordResetConfirm
)
from .course import (
    TeacherName, CourseBrief, StudentBrief,
    CourseCreate, CourseUpdate, CourseResponse,
    ModuleCreate, ModuleUpdate, ModuleResponse,
    LessonCreate, LessonUpdate, LessonResponse,
    EnrollmentCreate, EnrollmentUpdate, EnrollmentBrief, EnrollmentResponse
)
from .profile import (
    TeacherCreate, TeacherUpdate, TeacherResponse,
    StudentCreate, StudentUpdate, StudentResponse
)
from .assignment import (
    AssignmentCreate, AssignmentUpdate, AssignmentBrief, AssignmentResponse, AssignmentDetail,
    SubmissionCreate, SubmissionUpdate, SubmissionResponse
)
from .content import (
    MoveRequest, ReorderItem, ReorderRequest,
    CategoryCreate, CategoryUpdate, CategoryResponse,
    PostCreate, PostUpdate, PostResponse,
    HeroSlideCreate, HeroSlideUpdate, HeroSlideResponse,
    FeatureItemCreate, FeatureItemUpdate, FeatureItemResponse,
    StatisticCreate, StatisticUpdate, StatisticResponse,
    CharterCreate, CharterUpdate, CharterResponse,
    SettingUpdate,
    AboutPageUpdate, AboutPageResponse
)

__all__ = [
    "UserName", "UserSummary", "UserCreate", "UserUpdate", "UserResponse",
    "RegisterRequest", "LoginRequest", "LoginResponse", "TokenRefreshResponse",
    "PasswordResetRequest", "PasswordResetConfirm",
    # Courses
    "TeacherName", "CourseBrief", "StudentBrief",
    "CourseCreate", "CourseUpdate", "CourseResponse",
    "ModuleCreate", "ModuleUpdate", "ModuleResponse",
    "LessonCreate", "LessonUpdate", "LessonResponse",
    "EnrollmentCreate", "EnrollmentUpdate", "EnrollmentBrief", "EnrollmentResponse",
    # Profiles
    "TeacherCreate", "TeacherUpdate", "TeacherResponse",
    "StudentCreate", "StudentUpdate", "StudentResponse",
    # Coursework
    "AssignmentCreate", "AssignmentUpdate", "AssignmentBrief", "AssignmentResponse", "AssignmentDetail",
    "SubmissionCreate", "SubmissionUpdate", "SubmissionResponse",
    # Site content
    "MoveRequest", "ReorderItem", "ReorderRequest",
    "CategoryCreate", "CategoryUpdate", "CategoryResponse",
    "PostCreate", "PostUpdate", "PostResponse",
    "HeroSlideCreate", "HeroSlideUpdate", "HeroSlideResponse",
    "FeatureItemCreate", "FeatureItemUpdate", "FeatureItemResponse",
    "StatisticCreate", "StatisticUpdate", "StatisticResponse",
    "CharterCreate", "CharterUpdate", "CharterResponse",
    "SettingUpdate",
    "AboutPageUpdate", "AboutPageResponse"
]
