from datetime import datetime, timedelta

from cursalia import db
from cursalia.auth.routes import LOGIN_FAILED
from cursalia.models.user import User
from cursalia.models.user_session import UserSession


def test_signup_signs_the_user_in(client, app):
    response = client.post('/signup', data={
        'name': 'Elena',
        'lastname': 'Ruiz',
        'email': 'elena@correo.com',
        'password': 'clave-segura',
        'role': 'teacher'
    })

    assert response.status_code == 200
    assert response.get_json() == {'message': 'Registro exitoso', 'redirect': '/'}
    assert client.get('/check-auth').status_code == 200

    with app.app_context():
        assert User.query.filter_by(email='elena@correo.com').one().role == 'teacher'


def test_signup_duplicate_email(client, seeded):
    response = client.post('/signup', data={
        'name': 'Luis',
        'lastname': 'Copia',
        'email': 'alumno@correo.com',
        'password': 'clave-segura',
        'role': 'student'
    })

    assert response.status_code == 400
    assert response.get_json()['message'] == 'El correo electrónico ya está registrado'
    assert client.get('/check-auth').status_code == 401


def test_signup_accepts_json(client):
    response = client.post('/signup', json={
        'name': 'Pablo',
        'lastname': 'Mora',
        'email': 'pablo@correo.com',
        'password': 'corta',
        'role': 'student'
    })

    assert response.status_code == 400
    assert 'contraseña' in response.get_json()['message']


def test_signin_failures_share_one_message(client, seeded, login):
    unknown = login('nadie@correo.com')
    wrong = login('alumno@correo.com', 'incorrecta')

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json()['message'] == wrong.get_json()['message'] == LOGIN_FAILED


def test_cookie_only_carries_the_session_token(client, seeded, login):
    assert login('alumno@correo.com').status_code == 200

    with client.session_transaction() as sess:
        assert 'session_token' in sess
        assert not {'user_id', 'userId', 'role', '_user_id'} & set(sess.keys())


def test_logout_destroys_the_session(client, app, seeded, login):
    login('alumno@correo.com')
    with client.session_transaction() as sess:
        token = sess['session_token']

    response = client.get('/logout')

    assert response.status_code == 302
    assert client.get('/check-auth').status_code == 401
    with app.app_context():
        assert db.session.get(UserSession, token) is None

    # A second logout is harmless
    assert client.get('/logout').status_code == 302


def test_expired_session_is_not_authenticated(client, app, seeded, login):
    login('alumno@correo.com')
    with client.session_transaction() as sess:
        token = sess['session_token']

    with app.app_context():
        db.session.get(UserSession, token).expires_at = datetime.utcnow() - timedelta(minutes=1)
        db.session.commit()

    response = client.get('/check-auth')
    assert response.status_code == 401
    assert response.get_json() == {'authenticated': False}


def test_forged_token_is_rejected(client, seeded):
    with client.session_transaction() as sess:
        sess['session_token'] = 'inventado'

    assert client.get('/check-auth').status_code == 401


def test_protected_json_route_without_session(client, seeded):
    response = client.post(f"/course/{seeded['course_id']}/enroll", json={})

    assert response.status_code == 401
    assert response.get_json()['authenticated'] is False


def test_protected_page_redirects_to_login(client):
    response = client.get('/course')

    assert response.status_code == 302
    assert 'login=true' in response.headers['Location']


def test_corrupt_cookie_is_discarded(client, seeded):
    with client.session_transaction() as sess:
        sess['session_token'] = 12345

    assert client.get('/check-auth').status_code == 401
    with client.session_transaction() as sess:
        assert 'session_token' not in sess
