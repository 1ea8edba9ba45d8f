from datetime import datetime

import pytest
from fastapi import HTTPException

from conftest import auth_for, enroll, make_assignment, make_course
from langschool.api.courses import create_course, delete_course, get_courses, get_teacher_courses
from langschool.api.modules import create_lesson, create_module, get_modules, reorder_modules
from langschool.models import CourseModule, Enrollment, Lesson
from langschool.schemas.content import ReorderItem, ReorderRequest
from langschool.schemas.course import CourseCreate, LessonCreate, ModuleCreate


def course_payload(teacher_id: int, **overrides) -> CourseCreate:
    data = dict(
        title='TestDaF Prep',
        title_fa='آمادگی تست‌داف',
        description='Exam preparation',
        description_fa='آمادگی آزمون',
        price=350.0,
        level='B2',
        capacity=12,
        start_date=datetime(2030, 5, 1, 17, 0),
        end_date=datetime(2030, 7, 1, 19, 0),
        time_slot='Tue/Thu 17:00-19:00',
        location='Online',
        teacher_id=teacher_id,
    )
    data.update(overrides)
    return CourseCreate(**data)


def test_course_round_trip(db, admin, teacher) -> None:
    payload = course_payload(teacher.teacher_profile.id)
    created = create_course(payload, db=db, auth=auth_for(admin))

    fetched = get_courses(id=created.id, active=None, featured=None, db=db)

    for field, value in payload.model_dump().items():
        assert getattr(fetched, field) == value
    assert fetched.admin_id == admin.admin_profile.id
    assert fetched.teacher.user.name == 'Teacher A'


def test_course_needs_existing_teacher(db, admin) -> None:
    with pytest.raises(HTTPException) as exc:
        create_course(course_payload(404), db=db, auth=auth_for(admin))

    assert exc.value.status_code == 404
    assert exc.value.detail == 'Teacher not found'


def test_teacher_course_list_hides_inactive_by_default(db, teacher) -> None:
    make_course(db, teacher, title='Active')
    make_course(db, teacher, title='Archived', is_active=False)

    visible = get_teacher_courses(include_inactive=False, db=db, auth=auth_for(teacher))
    everything = get_teacher_courses(include_inactive=True, db=db, auth=auth_for(teacher))

    assert [c.title for c in visible] == ['Active']
    assert len(everything) == 2


def test_delete_course_cascades(db, admin, student, course) -> None:
    module = create_module(ModuleCreate(course_id=course.id, title='Intro', title_fa='مقدمه'), db=db, auth=auth_for(admin))
    create_lesson(LessonCreate(module_id=module.id, title='Alphabet', title_fa='الفبا'), db=db, auth=auth_for(admin))
    enroll(db, student, course)
    make_assignment(db, course)

    delete_course(id=course.id, db=db, auth=auth_for(admin))

    assert db.query(CourseModule).count() == 0
    assert db.query(Lesson).count() == 0
    assert db.query(Enrollment).count() == 0


def test_modules_are_listed_in_order(db, admin, course) -> None:
    auth = auth_for(admin)
    for title in ('Intro', 'Verbs', 'Cases'):
        create_module(ModuleCreate(course_id=course.id, title=title, title_fa=title), db=db, auth=auth)

    modules = get_modules(course_id=course.id, id=None, db=db, auth=auth)

    assert [(m.title, m.order_index) for m in modules] == [('Intro', 0), ('Verbs', 1), ('Cases', 2)]


def test_modules_require_course_id(db, admin) -> None:
    with pytest.raises(HTTPException) as exc:
        get_modules(course_id=None, id=None, db=db, auth=auth_for(admin))

    assert exc.value.detail == 'Missing course_id parameter'


def test_reorder_rejects_modules_of_other_course(db, admin, teacher, course) -> None:
    other = make_course(db, teacher, title='Other')
    foreign = create_module(ModuleCreate(course_id=other.id, title='X', title_fa='X'), db=db, auth=auth_for(admin))

    with pytest.raises(HTTPException) as exc:
        reorder_modules(
            course_id=course.id,
            payload=ReorderRequest(items=[ReorderItem(id=foreign.id, order_index=3)]),
            db=db,
            auth=auth_for(admin),
        )

    assert exc.value.detail == 'Modules do not belong to this course'
