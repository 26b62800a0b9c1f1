from cursalia import db
from cursalia.models.user import User, UserLink


def test_profile_page(client, seeded, login):
    login('alumno@correo.com')
    client.post(f"/course/{seeded['course_id']}/enroll", json={})

    page = client.get('/profile').get_data(as_text=True)

    assert 'alumno@correo.com' in page
    assert 'Python desde cero: 0%' in page


def test_save_profile(client, app, seeded, login):
    login('alumno@correo.com')

    response = client.post('/profile/save', data={
        'action': 'saveProfile',
        'firstName': 'Luis',
        'lastName': 'Pérez',
        'email': 'luis.perez@correo.com',
        'biography': 'Estudiante de datos'
    })

    assert response.status_code == 200
    with app.app_context():
        user = db.session.get(User, seeded['student_id'])
        assert user.email == 'luis.perez@correo.com'
        assert user.last_name == 'Pérez'


def test_save_profile_duplicate_email(client, seeded, login):
    login('alumno@correo.com')

    response = client.post('/profile/save', data={
        'action': 'saveProfile',
        'firstName': 'Luis',
        'lastName': 'Prueba',
        'email': 'marta@correo.com'
    })

    assert response.status_code == 400


def test_link_actions(client, app, seeded, login):
    login('alumno@correo.com')

    added = client.post('/profile/save', data={
        'action': 'addLink', 'linkName': 'GitHub', 'linkUrl': 'https://github.com/luis'
    })
    duplicated = client.post('/profile/save', data={
        'action': 'addLink', 'linkName': 'GitHub', 'linkUrl': 'https://github.com/luis'
    })

    assert added.status_code == 200
    assert duplicated.status_code == 400
    assert duplicated.get_json()['message'] == 'Este enlace ya ha sido agregado.'

    with app.app_context():
        link_id = UserLink.query.filter_by(user_id=seeded['student_id']).one().id

    edited = client.post('/profile/save', data={
        'action': 'editLink', 'linkId': link_id, 'linkName': 'Portfolio', 'linkUrl': 'https://luis.dev'
    })
    assert edited.status_code == 200

    deleted = client.post('/profile/delete-link', data={'deleteLinkId': link_id})
    assert deleted.status_code == 200

    with app.app_context():
        assert UserLink.query.filter_by(user_id=seeded['student_id']).count() == 0


def test_unknown_profile_action(client, seeded, login):
    login('alumno@correo.com')

    response = client.post('/profile/save', data={'action': 'borrarTodo'})

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Acción no válida.'
