import itertools
import os
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

from langschool.database import Base  # noqa: E402
from langschool.models import Course, Enrollment, Assignment, EnrollmentStatus, Role, User  # noqa: E402
from langschool.core.permissions import AuthContext  # noqa: E402
from langschool.services.roles import create_user_with_profile  # noqa: E402

_emails = itertools.count(1)


@pytest.fixture
def session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def make_user(db, role: str = Role.STUDENT, name: str = 'Test User', password: str = 'secret123', **fields) -> User:
    email = fields.pop('email', None) or f'user{next(_emails)}@example.com'
    user = create_user_with_profile(db, name, email, password, role=role, **fields)
    db.commit()
    return user


def auth_for(user: User) -> AuthContext:
    return AuthContext(
        user_id=user.id,
        email=user.email,
        role=user.role,
        profile_id=user.profile.id,
    )


def make_course(db, teacher: User, **overrides) -> Course:
    start = datetime(2030, 3, 1, 9, 0)
    data = dict(
        title='German A1',
        title_fa='آلمانی A1',
        description='Beginner German',
        description_fa='آلمانی مقدماتی',
        price=120.0,
        level='A1',
        capacity=10,
        start_date=start,
        end_date=start + timedelta(weeks=8),
        time_slot='Mon/Wed 18:00-20:00',
        location='Room 1',
        teacher_id=teacher.teacher_profile.id,
    )
    data.update(overrides)
    course = Course(**data)
    db.add(course)
    db.commit()
    return course


def enroll(db, student: User, course: Course, status: str = EnrollmentStatus.ACTIVE) -> Enrollment:
    enrollment = Enrollment(student_id=student.student_profile.id, course_id=course.id, status=status)
    db.add(enrollment)
    db.commit()
    return enrollment


def make_assignment(db, course: Course, due_date: datetime = None) -> Assignment:
    assignment = Assignment(
        title='Essay',
        title_fa='انشا',
        description='Write 200 words',
        due_date=due_date or datetime.utcnow() + timedelta(days=7),
        course_id=course.id,
        teacher_id=course.teacher_id,
    )
    db.add(assignment)
    db.commit()
    return assignment


@pytest.fixture
def admin(db) -> User:
    return make_user(db, Role.ADMIN, name='Admin')


@pytest.fixture
def teacher(db) -> User:
    return make_user(db, Role.TEACHER, name='Teacher A', bio='Native speaker')


@pytest.fixture
def student(db) -> User:
    return make_user(db, Role.STUDENT, name='Student', phone='+49 123')


@pytest.fixture
def course(db, teacher) -> Course:
    return make_course(db, teacher)


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from langschool.database import get_db
    from langschool.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
