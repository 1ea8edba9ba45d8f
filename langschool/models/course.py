from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, Float, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class EnrollmentStatus:
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    ALL = (ACTIVE, COMPLETED, CANCELLED)


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    title_fa = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    description_fa = Column(Text, nullable=False)
    price = Column(Float, nullable=False, default=0)
    thumbnail = Column(String(500))
    level = Column(String(20))  # A1 .. C2
    is_active = Column(Boolean, default=True)
    featured = Column(Boolean, default=False)
    capacity = Column(Integer, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    time_slot = Column(String(100), nullable=False)
    location = Column(String(200), nullable=False)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    teacher = relationship("Teacher", back_populates="courses")
    modules = relationship(
        "CourseModule", back_populates="course", cascade="all, delete-orphan",
        order_by="CourseModule.order_index",
    )
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")
    assignments = relationship("Assignment", back_populates="course", cascade="all, delete-orphan")

    @property
    def module_count(self):
        return len(self.modules)

    @property
    def enrollment_count(self):
        return len(self.enrollments)


class CourseModule(Base):
    __tablename__ = "course_modules"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    title = Column(String(200), nullable=False)
    title_fa = Column(String(200), nullable=False)
    description = Column(Text)
    description_fa = Column(Text)
    order_index = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    course = relationship("Course", back_populates="modules")
    lessons = relationship(
        "Lesson", back_populates="module", cascade="all, delete-orphan",
        order_by="Lesson.order_index",
    )

    @property
    def lesson_count(self):
        return len(self.lessons)

    __mapper_args__ = {"version_id_col": version}


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    module_id = Column(Integer, ForeignKey("course_modules.id"), nullable=False)
    title = Column(String(200), nullable=False)
    title_fa = Column(String(200), nullable=False)
    content = Column(Text)
    content_fa = Column(Text)
    duration = Column(Integer)  # minutes
    order_index = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    module = relationship("CourseModule", back_populates="lessons")

    __mapper_args__ = {"version_id_col": version}


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    status = Column(String(20), nullable=False, default=EnrollmentStatus.ACTIVE)
    enrolled_at = Column(DateTime, server_default=func.now())

    student = relationship("Student", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")
