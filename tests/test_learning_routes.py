from cursalia.models.enrollment import CourseProgress, Enrollment
from cursalia.models.rating import Rating


def _enroll(client, course_id):
    return client.post(f'/course/{course_id}/enroll', json={})


def test_enroll(client, app, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']

    response = _enroll(client, course_id)

    assert response.status_code == 201
    assert response.get_json() == {
        'success': True,
        'message': 'Inscripción exitosa',
        'redirectUrl': f'/course_player/{course_id}'
    }
    with app.app_context():
        enrollment = Enrollment.query.filter_by(user_id=seeded['student_id'], course_id=course_id).one()
        assert enrollment.progress == 0


def test_enroll_twice(client, app, seeded, login):
    login('alumno@correo.com')
    _enroll(client, seeded['course_id'])

    response = _enroll(client, seeded['course_id'])

    assert response.status_code == 400
    body = response.get_json()
    assert body['success'] is False
    assert body['message'] == 'Ya estás inscrito en este curso'
    with app.app_context():
        assert Enrollment.query.filter_by(user_id=seeded['student_id']).count() == 1


def test_enroll_missing_course(client, seeded, login):
    login('alumno@correo.com')

    response = _enroll(client, 999)

    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_update_progress(client, app, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']
    _enroll(client, course_id)

    response = client.post(f'/course/{course_id}/update-progress', json={
        'lastViewedSection': seeded['section_ids'][1],
        'completedSections': 2,
        'totalSections': 3
    })

    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'progress': 66}
    with app.app_context():
        record = CourseProgress.query.filter_by(user_id=seeded['student_id'], course_id=course_id).one()
        assert record.progress == 66
        assert record.last_viewed_section == seeded['section_ids'][1]


def test_update_progress_with_form_data(client, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']
    _enroll(client, course_id)

    response = client.post(f'/course/{course_id}/update-progress', data={
        'completedSections': '3',
        'totalSections': '3'
    })

    assert response.get_json() == {'success': True, 'progress': 100}


def test_update_progress_rejects_fractional_counts(client, app, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']
    _enroll(client, course_id)

    response = client.post(f'/course/{course_id}/update-progress', json={
        'lastViewedSection': seeded['section_ids'][0] + 0.9,
        'completedSections': 1.5,
        'totalSections': 3.7
    })

    assert response.status_code == 400
    assert response.get_json()['success'] is False
    with app.app_context():
        record = CourseProgress.query.filter_by(user_id=seeded['student_id'], course_id=course_id).one()
        assert record.progress == 0


def test_update_progress_rejects_zero_sections(client, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']
    _enroll(client, course_id)

    response = client.post(f'/course/{course_id}/update-progress', json={
        'completedSections': 0,
        'totalSections': 0
    })

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_update_progress_without_enrollment(client, seeded, login):
    login('alumno@correo.com')

    response = client.post(f"/course/{seeded['course_id']}/update-progress", json={
        'completedSections': 1,
        'totalSections': 3
    })

    assert response.status_code == 404


def test_player_requires_enrollment(client, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']

    response = client.get(f'/course_player/{course_id}')
    assert response.status_code == 302
    assert f'/course_details/{course_id}' in response.headers['Location']

    _enroll(client, course_id)
    page = client.get(f'/course_player/{course_id}').get_data(as_text=True)

    assert 'https://www.youtube.com/embed/abc123XYZ_-' in page
    assert 'https://www.youtube.com/embed/def456?start=90' in page


def test_creator_can_open_player(client, seeded, login):
    login('profesora@correo.com')

    assert client.get(f"/course_player/{seeded['course_id']}").status_code == 200


def test_rate_course(client, app, seeded, login):
    login('alumno@correo.com')
    course_id = seeded['course_id']
    _enroll(client, course_id)

    response = client.post('/rate_course', data={
        'course_id': course_id,
        'user_id': seeded['student_id'],
        'rating': '4',
        'comment': 'Muy claro'
    })

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert 'Valoración añadida correctamente.' in page
    assert 'Muy claro' in page

    again = client.post('/rate_course', data={'course_id': course_id, 'rating': '1'})

    assert again.status_code == 302
    with app.app_context():
        ratings = Rating.query.filter_by(course_id=course_id).all()
        assert [r.rating for r in ratings] == [4]


def test_rate_course_requires_enrollment(client, app, seeded, login):
    login('alumno@correo.com')

    response = client.post('/rate_course', data={'course_id': seeded['course_id'], 'rating': '5'})

    assert response.status_code == 302
    with app.app_context():
        assert Rating.query.count() == 0


def test_rate_course_out_of_range(client, app, seeded, login):
    login('alumno@correo.com')
    _enroll(client, seeded['course_id'])

    response = client.post('/rate_course', data={'course_id': seeded['course_id'], 'rating': '7'})

    assert response.status_code == 302
    with app.app_context():
        assert Rating.query.count() == 0


def test_rate_course_for_someone_else(client, app, seeded, login):
    login('alumno@correo.com')
    _enroll(client, seeded['course_id'])

    client.post('/rate_course', data={
        'course_id': seeded['course_id'],
        'user_id': seeded['other_id'],
        'rating': '1'
    })

    with app.app_context():
        assert Rating.query.count() == 0
