from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from conftest import auth_for, make_user
from langschool.core.errors import ProfileMissing
from langschool.core.permissions import (
    build_auth_context,
    get_auth_context,
    get_optional_auth_context,
    require_admin,
    require_role,
    require_teacher_or_student,
    resolve_identity,
)
from langschool.core.security import create_user_token
from langschool.models import Role, UserSession


def make_request(cookie: str = None) -> Request:
    headers = []
    if cookie:
        headers.append((b'cookie', f'session_token={cookie}'.encode()))
    return Request({'type': 'http', 'method': 'GET', 'path': '/', 'headers': headers})


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)


def open_session(db, user, token: str = 'session-abc', expires_in: timedelta = timedelta(hours=1)) -> UserSession:
    session = UserSession(token=token, user_id=user.id, expires_at=datetime.utcnow() + expires_in)
    db.add(session)
    db.commit()
    return session


def test_no_credentials_is_unauthorized(db) -> None:
    with pytest.raises(HTTPException) as exc:
        get_auth_context(make_request(), None, db)

    assert exc.value.status_code == 401
    assert exc.value.detail == 'Unauthorized'


def test_optional_context_is_none_for_anonymous_caller(db) -> None:
    assert get_optional_auth_context(make_request(), None, db) is None


def test_valid_token_resolves_user_and_profile(db, teacher) -> None:
    auth = get_auth_context(make_request(), bearer(create_user_token(teacher)), db)

    assert auth.user_id == teacher.id
    assert auth.role == Role.TEACHER
    assert auth.profile_id == teacher.teacher_profile.id
    assert auth.source == 'token'
    assert auth.is_teacher and not auth.is_admin


def test_invalid_token_falls_back_to_session(db, student) -> None:
    open_session(db, student)

    user, source = resolve_identity(make_request('session-abc'), bearer('not-a-jwt'), db)

    assert user.id == student.id
    assert source == 'session'


def test_expired_token_without_session_is_unauthorized(db, student) -> None:
    token = create_user_token(student, expires_delta=timedelta(minutes=-5))

    with pytest.raises(HTTPException) as exc:
        get_auth_context(make_request(), bearer(token), db)

    assert exc.value.status_code == 401


def test_expired_session_is_ignored(db, student) -> None:
    open_session(db, student, expires_in=timedelta(minutes=-1))

    assert resolve_identity(make_request('session-abc'), None, db) == (None, None)


def test_token_for_deleted_user_is_rejected(db, student) -> None:
    token = create_user_token(student)
    db.delete(student)
    db.commit()

    with pytest.raises(HTTPException) as exc:
        get_auth_context(make_request(), bearer(token), db)

    assert exc.value.status_code == 401
    assert exc.value.detail == 'User not found'


def test_role_comes_from_database_not_token(db, student) -> None:
    token = create_user_token(student)
    student.role = Role.ADMIN
    db.commit()

    # the user row says ADMIN but there is no admin profile
    with pytest.raises(ProfileMissing) as exc:
        get_auth_context(make_request(), bearer(token), db)

    assert exc.value.status_code == 403
    assert exc.value.detail == 'Admin profile not found'
    assert exc.value.extra == {'code': 'PROFILE_MISSING'}


def test_missing_profile_is_reported(db) -> None:
    user = make_user(db, Role.TEACHER)
    db.delete(user.teacher_profile)
    db.commit()
    db.refresh(user)

    with pytest.raises(ProfileMissing):
        build_auth_context(user, 'token')


def test_require_admin_refuses_other_roles(db, teacher) -> None:
    with pytest.raises(HTTPException) as exc:
        require_admin(auth_for(teacher))

    assert exc.value.status_code == 403
    assert exc.value.detail == 'Not authorized - admin access required'


def test_require_role_lists_every_allowed_role(db, admin) -> None:
    with pytest.raises(HTTPException) as exc:
        require_teacher_or_student(auth_for(admin))

    assert exc.value.detail == 'Not authorized - teacher or student access required'


def test_require_role_passes_context_through(db, student) -> None:
    auth = auth_for(student)

    assert require_role(Role.ADMIN, Role.STUDENT)(auth) is auth
