from datetime import timedelta
from marketplace import db
from marketplace.models import User, UserSession


def register_payload(**overrides):
    payload = {
        'email': 'new.student@campus.edu',
        'password': 'longenough1',
        'firstName': 'New',
        'lastName': 'Student',
        'university': 'campus'
    }
    payload.update(overrides)
    return payload


def test_register_creates_student_with_hashed_password(client):
    response = client.post('/auth/register', json=register_payload(role='admin'))
    assert response.status_code == 201
    user = response.get_json()['user']
    assert user['email'] == 'new.student@campus.edu'
    assert user['role'] == 'student'
    assert user['isVerified'] is False
    assert 'password' not in user

    stored = User.query.filter_by(email='new.student@campus.edu').first()
    assert stored.password != 'longenough1'


def test_register_starts_a_session(client):
    client.post('/auth/register', json=register_payload())
    response = client.get('/auth/me')
    assert response.status_code == 200
    assert response.get_json()['user']['firstName'] == 'New'


def test_register_rejects_duplicate_email(client, make_user):
    make_user(email='taken@campus.edu')
    response = client.post('/auth/register', json=register_payload(email='taken@campus.edu'))
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Email already registered'


def test_register_validates_fields(client):
    response = client.post('/auth/register', json=register_payload(password='short'))
    assert response.status_code == 400
    assert 'password' in response.get_json()['errors']

    response = client.post('/auth/register', json=register_payload(email='not-an-email'))
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid email format'


def test_login_with_wrong_password(client, make_user):
    user = make_user()
    response = client.post('/auth/login', json={'email': user.email, 'password': 'wrong-password'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid credentials'


def test_login_unknown_email(client):
    response = client.post('/auth/login', json={'email': 'ghost@campus.edu', 'password': 'whatever1'})
    assert response.status_code == 401


def test_me_requires_session(client):
    response = client.get('/auth/me')
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Authentication required'


def test_login_then_logout(make_user, login):
    user = make_user()
    client = login(user)
    assert client.get('/auth/me').get_json()['user']['id'] == user.id

    assert client.post('/auth/logout').status_code == 200
    assert client.get('/auth/me').status_code == 401


def test_logout_requires_session(client):
    assert client.post('/auth/logout').status_code == 401


def session_id(client):
    with client.session_transaction() as sess:
        return sess.get('sid')


def test_logout_invalidates_the_old_cookie(app, make_user, login):
    user = make_user()
    client = login(user)
    sid = session_id(client)
    assert db.session.get(UserSession, sid).user_id == user.id

    client.post('/auth/logout')
    assert db.session.get(UserSession, sid) is None

    replay = app.test_client()
    with replay.session_transaction() as sess:
        sess['sid'] = sid
    assert replay.get('/auth/me').status_code == 401


def test_login_again_replaces_previous_session(make_user, login):
    user = make_user()
    client = login(user)
    first = session_id(client)

    client.post('/auth/login', json={'email': user.email, 'password': 'password123'})
    assert session_id(client) != first
    assert UserSession.query.filter_by(user_id=user.id).count() == 1


def test_expired_session_is_rejected(make_user, login):
    client = login(make_user())
    record = db.session.get(UserSession, session_id(client))
    record.expires_at = record.created_at - timedelta(seconds=1)
    db.session.commit()

    assert client.get('/auth/me').status_code == 401
    assert UserSession.query.count() == 0
