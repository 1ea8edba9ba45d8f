from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from conftest import auth_for, enroll, make_assignment, make_course, make_user
from langschool.api.assignments import create_assignment, delete_assignment, get_assignments, update_assignment
from langschool.api.submissions import create_submission
from langschool.models import Assignment, Role, Submission
from langschool.schemas.assignment import AssignmentCreate, AssignmentUpdate, SubmissionCreate


def assignment_payload(course_id: int, **overrides) -> AssignmentCreate:
    data = dict(
        title='Letter',
        title_fa='نامه',
        description='Write a formal letter',
        description_fa='یک نامه رسمی بنویسید',
        due_date=datetime(2030, 4, 1, 23, 59),
        course_id=course_id,
    )
    data.update(overrides)
    return AssignmentCreate(**data)


def test_teacher_cannot_attach_assignment_to_foreign_course(db, teacher, course) -> None:
    teacher_b = make_user(db, Role.TEACHER, name='Teacher B')

    with pytest.raises(HTTPException) as exc:
        create_assignment(assignment_payload(course.id), db=db, auth=auth_for(teacher_b))

    assert exc.value.status_code == 404
    assert exc.value.detail == 'Course not found or does not belong to this teacher'
    assert db.query(Assignment).count() == 0


def test_create_then_get_by_id_returns_submitted_fields(db, teacher, course) -> None:
    payload = assignment_payload(course.id)
    created = create_assignment(payload, db=db, auth=auth_for(teacher))

    fetched = get_assignments(id=created.id, course_id=None, db=db, auth=auth_for(teacher))

    for field, value in payload.model_dump().items():
        assert getattr(fetched, field) == value
    assert fetched.teacher_id == teacher.teacher_profile.id
    assert fetched.submissions == []


def test_create_assignment_requires_fields(db, teacher, course) -> None:
    with pytest.raises(HTTPException) as exc:
        create_assignment(AssignmentCreate(course_id=course.id), db=db, auth=auth_for(teacher))

    assert exc.value.status_code == 400
    assert exc.value.detail == 'Missing required fields'


def test_teacher_only_lists_own_assignments(db, teacher, course) -> None:
    teacher_b = make_user(db, Role.TEACHER, name='Teacher B')
    make_assignment(db, course)
    make_assignment(db, make_course(db, teacher_b))

    listed = get_assignments(id=None, course_id=None, db=db, auth=auth_for(teacher))['assignments']

    assert [a.course_id for a in listed] == [course.id]


def test_student_sees_assignments_of_enrolled_courses_only(db, teacher, student, course) -> None:
    other_course = make_course(db, teacher, title='German B1')
    make_assignment(db, course)
    make_assignment(db, other_course)
    enroll(db, student, course)

    listed = get_assignments(id=None, course_id=None, db=db, auth=auth_for(student))['assignments']

    assert [a.course_id for a in listed] == [course.id]


def test_student_detail_hides_other_submissions(db, teacher, student, course) -> None:
    classmate = make_user(db, Role.STUDENT)
    assignment = make_assignment(db, course)
    enroll(db, student, course)
    enroll(db, classmate, course)
    for who in (student, classmate):
        db.add(Submission(
            assignment_id=assignment.id,
            student_id=who.student_profile.id,
            content='Antwort',
            submitted_at=datetime.utcnow(),
        ))
    db.commit()

    detail = get_assignments(id=assignment.id, course_id=None, db=db, auth=auth_for(student))

    assert [s.student_id for s in detail.submissions] == [student.student_profile.id]


def test_update_foreign_assignment_is_not_found(db, teacher, course) -> None:
    assignment = make_assignment(db, course)
    teacher_b = make_user(db, Role.TEACHER, name='Teacher B')

    with pytest.raises(HTTPException) as exc:
        update_assignment(id=assignment.id, payload=AssignmentUpdate(title='Hijack'), db=db, auth=auth_for(teacher_b))

    assert exc.value.status_code == 404
    assert exc.value.detail == 'Assignment not found or does not belong to this teacher'


def test_delete_assignment_removes_submissions(db, teacher, student, course) -> None:
    assignment = make_assignment(db, course, due_date=datetime.utcnow() - timedelta(days=1))
    db.add(Submission(
        assignment_id=assignment.id,
        student_id=student.student_profile.id,
        content='Spät',
        submitted_at=datetime.utcnow(),
        is_late=True,
    ))
    db.commit()

    assert delete_assignment(id=assignment.id, db=db, auth=auth_for(teacher)) == {'success': True}
    assert db.query(Assignment).count() == 0
    assert db.query(Submission).count() == 0


def test_delete_assignment_requires_id(db, teacher) -> None:
    with pytest.raises(HTTPException) as exc:
        delete_assignment(id=None, db=db, auth=auth_for(teacher))

    assert exc.value.detail == 'Assignment ID is required'


TEHRAN = timezone(timedelta(hours=3, minutes=30))


def test_due_date_with_offset_is_stored_as_utc(db, teacher, course) -> None:
    due = datetime(2030, 4, 1, 23, 59, tzinfo=TEHRAN)

    created = create_assignment(assignment_payload(course.id, due_date=due), db=db, auth=auth_for(teacher))

    assert created.due_date == datetime(2030, 4, 1, 20, 29)
    updated = update_assignment(
        id=created.id,
        payload=AssignmentUpdate(due_date=datetime(2030, 4, 2, 12, 0, tzinfo=timezone(timedelta(hours=2)))),
        db=db,
        auth=auth_for(teacher),
    )
    assert updated.due_date == datetime(2030, 4, 2, 10, 0)


def test_offset_due_date_in_the_past_makes_submission_late(db, teacher, student, course) -> None:
    # two hours ago, written as Tehran wall-clock time
    due = (datetime.now(timezone.utc) - timedelta(hours=2)).astimezone(TEHRAN)
    assignment = create_assignment(assignment_payload(course.id, due_date=due), db=db, auth=auth_for(teacher))
    enroll(db, student, course)

    submission = create_submission(
        SubmissionCreate(assignment_id=assignment.id, content='Zu spät'),
        db=db,
        auth=auth_for(student),
    )

    assert submission.is_late is True
