import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cursalia import create_app, db
from cursalia.models.course import Category
from cursalia.models.user import User
from cursalia.services.catalog_service import CatalogService

PASSWORD = 'secreto123'

SECTIONS = [
    ('Introducción', 'https://www.youtube.com/watch?v=abc123XYZ_-'),
    ('Variables', 'https://youtu.be/def456?t=1m30s'),
    ('Funciones', 'https://www.youtube.com/embed/ghi789?start=15'),
]


def create_user(first_name, email, role, password=PASSWORD, last_name='Prueba'):
    user = User(first_name=first_name, last_name=last_name, email=email, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    """Ids of a teacher, two students, a category and a course with three sections"""
    with app.app_context():
        teacher = create_user('Ana', 'profesora@correo.com', User.ROLE_TEACHER)
        student = create_user('Luis', 'alumno@correo.com', User.ROLE_STUDENT)
        other = create_user('Marta', 'marta@correo.com', User.ROLE_STUDENT)
        category = Category(name='Programación')
        db.session.add(category)
        db.session.commit()

        course = CatalogService.create_course(
            teacher.id,
            {'name': 'Python desde cero', 'description': 'Curso básico', 'language': 'Español'},
            category_id=category.id,
            requirements=['Saber usar un ordenador', 'Ganas de aprender'],
            sections=SECTIONS
        )

        return {
            'teacher_id': teacher.id,
            'student_id': student.id,
            'other_id': other.id,
            'category_id': category.id,
            'course_id': course.id,
            'section_ids': [section.id for section in course.sections],
        }


@pytest.fixture
def ctx(app, seeded):
    """Application context for calling services directly"""
    with app.app_context():
        yield seeded
        db.session.remove()


@pytest.fixture
def login(client):
    """Sign the test client in through the real /signin route"""
    def _login(email, password=PASSWORD):
        return client.post('/signin', data={'email': email, 'password': password})
    return _login
