from datetime import datetime, timedelta

import pytest

from conftest import enroll, make_assignment, make_user
from langschool.config import settings
from langschool.core.security import create_user_token
from langschool.models import Course, Role

PROTECTED_ROUTES = [
    ('get', '/api/auth/me'),
    ('post', '/api/auth/refresh'),
    ('get', '/api/users'),
    ('delete', '/api/users?id=1'),
    ('post', '/api/teachers'),
    ('delete', '/api/students?id=1'),
    ('get', '/api/students/teacher'),
    ('post', '/api/courses'),
    ('get', '/api/courses/teacher'),
    ('get', '/api/courses/modules?course_id=1'),
    ('get', '/api/enrollments'),
    ('get', '/api/assignments'),
    ('post', '/api/assignments'),
    ('get', '/api/submissions'),
    ('post', '/api/submissions'),
    ('post', '/api/blog/posts'),
    ('post', '/api/hero'),
    ('post', '/api/features/move?id=1'),
    ('patch', '/api/statistics/order'),
    ('put', '/api/charters?id=1'),
    ('post', '/api/settings/global'),
    ('post', '/api/about'),
    ('get', '/api/dashboard/stats'),
]


def bearer_for(user) -> dict:
    return {'Authorization': f'Bearer {create_user_token(user)}'}


@pytest.mark.parametrize(('method', 'path'), PROTECTED_ROUTES)
def test_protected_routes_require_credentials(client, method: str, path: str) -> None:
    response = client.request(method.upper(), path, json={})

    assert response.status_code == 401
    assert response.json() == {'error': 'Unauthorized'}


def test_wrong_role_is_forbidden_without_side_effects(client, db, student) -> None:
    response = client.post(
        '/api/settings/global',
        json={'key': 'phone', 'value': '123'},
        headers=bearer_for(student),
    )

    assert response.status_code == 403
    assert response.json() == {'error': 'Not authorized - admin access required'}
    assert client.get('/api/settings/global').json() == {}


def test_login_sets_session_cookie_usable_without_token(client, db) -> None:
    make_user(db, Role.STUDENT, name='Lena', email='lena@example.com', password='geheim123')

    login = client.post('/api/auth/login', json={'email': 'LENA@example.com', 'password': 'geheim123'})
    me = client.get('/api/auth/me')

    assert login.status_code == 200
    assert login.json()['token']
    assert me.status_code == 200
    assert me.json()['email'] == 'lena@example.com'


def test_bad_token_falls_back_to_session_cookie(client, db) -> None:
    make_user(db, Role.TEACHER, email='t@example.com', password='pw123456', bio='x')
    client.post('/api/auth/login', json={'email': 't@example.com', 'password': 'pw123456'})

    response = client.get('/api/auth/status', headers={'Authorization': 'Bearer garbage'})

    assert response.json()['session_auth'] is True
    assert response.json()['token_auth'] is False


def test_wrong_password_is_rejected(client, db) -> None:
    make_user(db, Role.STUDENT, email='a@example.com', password='right-one')

    response = client.post('/api/auth/login', json={'email': 'a@example.com', 'password': 'wrong'})

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid credentials'}


def test_register_rejects_admin_role(client) -> None:
    response = client.post(
        '/api/auth/register',
        json={'name': 'Eve', 'email': 'eve@example.com', 'password': 'pw', 'role': 'ADMIN'},
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid role'}


def test_register_then_login(client) -> None:
    registered = client.post(
        '/api/auth/register',
        json={'name': 'Ali', 'email': 'ali@example.com', 'password': 'pw123456'},
    )
    login = client.post('/api/auth/login', json={'email': 'ali@example.com', 'password': 'pw123456'})

    assert registered.status_code == 201
    assert registered.json()['user']['role'] == Role.STUDENT
    assert login.status_code == 200


def test_profile_missing_is_distinguishable(client, db) -> None:
    user = make_user(db, Role.STUDENT)
    db.delete(user.student_profile)
    db.commit()

    response = client.get('/api/auth/me', headers=bearer_for(user))

    assert response.status_code == 403
    assert response.json() == {'error': 'Student profile not found', 'code': 'PROFILE_MISSING'}


def test_missing_body_fields_are_listed(client, db, admin) -> None:
    response = client.post('/api/courses', json={'title': 'Only a title'}, headers=bearer_for(admin))

    assert response.status_code == 400
    body = response.json()
    assert body['error'].startswith('Missing required fields: ')
    assert 'title_fa' in body['error']


def test_public_content_is_not_cached(client) -> None:
    response = client.get('/api/hero')

    assert response.status_code == 200
    assert response.headers['cache-control'] == 'no-cache, no-store, must-revalidate'


def test_duplicate_submission_body_carries_existing_id(client, db, student, course) -> None:
    enroll(db, student, course)
    assignment = make_assignment(db, course)
    payload = {'assignment_id': assignment.id, 'content': 'Hallo'}

    first = client.post('/api/submissions', json=payload, headers=bearer_for(student))
    second = client.post('/api/submissions', json=payload, headers=bearer_for(student))

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {
        'error': 'You have already submitted this assignment',
        'existing_submission_id': first.json()['id'],
    }


def test_health(client) -> None:
    assert client.get('/api/health').json() == {'status': 'healthy'}


def test_explicit_null_for_required_field_is_refused(client, db, admin, course) -> None:
    response = client.put(f'/api/courses?id={course.id}', json={'title': None}, headers=bearer_for(admin))

    assert response.status_code == 400
    assert response.json() == {'error': 'Fields cannot be null: title', 'fields': ['title']}
    db.expire_all()
    assert db.get(Course, course.id).title == 'German A1'


def test_dashboard_stats_has_no_query_parameters(client, admin) -> None:
    response = client.get('/api/dashboard/stats', headers=bearer_for(admin))
    operation = client.get('/openapi.json').json()['paths']['/api/dashboard/stats']['get']

    assert response.status_code == 200
    assert 'total_users' in response.json()
    assert operation.get('parameters', []) == []


def test_password_reset_replaces_password_and_closes_sessions(client, db) -> None:
    user = make_user(db, Role.STUDENT, email='mina@example.com', password='old-pass1')
    client.post('/api/auth/login', json={'email': 'mina@example.com', 'password': 'old-pass1'})

    requested = client.post('/api/auth/reset-password', json={'email': 'Mina@example.com'})
    db.expire_all()
    token = user.reset_token
    reset = client.put('/api/auth/reset-password', json={'token': token, 'password': 'new-pass1'})

    assert requested.json()['success'] is True
    assert token
    assert reset.status_code == 200
    assert client.get('/api/auth/me').status_code == 401
    old_login = client.post('/api/auth/login', json={'email': 'mina@example.com', 'password': 'old-pass1'})
    new_login = client.post('/api/auth/login', json={'email': 'mina@example.com', 'password': 'new-pass1'})
    assert old_login.status_code == 401
    assert new_login.status_code == 200
    db.expire_all()
    assert user.reset_token is None
    assert user.reset_token_expiry is None


def test_reset_token_works_only_once(client, db) -> None:
    user = make_user(db, Role.STUDENT, email='once@example.com')
    client.post('/api/auth/reset-password', json={'email': 'once@example.com'})
    db.expire_all()
    token = user.reset_token

    client.put('/api/auth/reset-password', json={'token': token, 'password': 'first-pass'})
    again = client.put('/api/auth/reset-password', json={'token': token, 'password': 'second-pass'})

    assert again.status_code == 400
    assert again.json() == {'error': 'Invalid or expired token'}


def test_reset_request_for_unknown_email_looks_the_same(client, db, monkeypatch) -> None:
    monkeypatch.setattr(settings, 'debug', False)
    make_user(db, Role.STUDENT, email='known@example.com')

    known = client.post('/api/auth/reset-password', json={'email': 'known@example.com'})
    unknown = client.post('/api/auth/reset-password', json={'email': 'nobody@example.com'})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()


def test_reset_request_needs_email(client) -> None:
    response = client.post('/api/auth/reset-password', json={})

    assert response.status_code == 400
    assert response.json() == {'error': 'Email is required'}


def test_expired_reset_token_is_refused(client, db) -> None:
    user = make_user(db, Role.STUDENT, email='late@example.com')
    client.post('/api/auth/reset-password', json={'email': 'late@example.com'})
    db.expire_all()
    user.reset_token_expiry = datetime.utcnow() - timedelta(minutes=1)
    db.commit()

    response = client.put('/api/auth/reset-password', json={'token': user.reset_token, 'password': 'pw-new-123'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid or expired token'}


def test_debug_mode_echoes_reset_token(client, db, monkeypatch) -> None:
    user = make_user(db, Role.TEACHER, email='dev@example.com', bio='x')
    monkeypatch.setattr(settings, 'debug', True)

    response = client.post('/api/auth/reset-password', json={'email': 'dev@example.com'})

    db.expire_all()
    assert response.json()['debug']['reset_token'] == user.reset_token
    assert response.json()['debug']['reset_link'].endswith(f'/reset-password?token={user.reset_token}')
