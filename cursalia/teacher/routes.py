"""
Teacher routes
"""
import logging
from functools import wraps

from flask import render_template, redirect, request, url_for, flash
from flask_login import login_required, current_user

from cursalia.errors import CursaliaError, ForbiddenError, NotFoundError
from cursalia.helpers import form_list
from cursalia.models.user import User
from cursalia.services.catalog_service import CatalogService
from cursalia.teacher import teacher_bp
from cursalia.teacher.forms import CourseForm

logger = logging.getLogger(__name__)


def teacher_required(f):
    """Decorator to require teacher role"""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if current_user.role != User.ROLE_TEACHER:
            flash('Acceso denegado. Esta área es solo para profesores.', 'error')
            return redirect(url_for('main.index'))
        return f(*args, **kwargs)
    return decorated_function


def _submitted_children():
    """Requirements and (title, url) section pairs from the submitted form"""
    requirements = form_list('requirements')
    sections = list(zip(form_list('section_title'), form_list('video_url')))
    return requirements, sections


def _form_errors(form):
    return '; '.join(error for errors in form.errors.values() for error in errors)


@teacher_bp.route('/my_courses')
@teacher_required
def my_courses():
    """Courses created by the current teacher"""
    courses = CatalogService.list_courses(creator_id=current_user.id)
    return render_template('my_courses.html', courses=courses)


@teacher_bp.route('/create_course', methods=['GET', 'POST'])
@teacher_required
def create_course():
    """Create a course with its requirements and sections"""
    form = CourseForm()

    if form.validate_on_submit():
        requirements, sections = _submitted_children()
        try:
            CatalogService.create_course(
                current_user.id,
                form.course_fields(),
                category_id=form.category.data,
                requirements=requirements,
                sections=sections
            )
            flash('Curso creado exitosamente.', 'success')
            return redirect(url_for('teacher.my_courses'))
        except CursaliaError as e:
            logger.error("Error creating course: %s", e.message)
            flash(f'Hubo un error al crear el curso: {e.message}', 'error')
            return redirect(url_for('teacher.create_course'))
    elif form.is_submitted():
        flash(f'Hubo un error al crear el curso: {_form_errors(form)}', 'error')

    return render_template('create_course.html',
                           form=form,
                           course=None,
                           categories=CatalogService.list_categories(),
                           skills=form_list('requirements'),
                           sections=[])


@teacher_bp.route('/course/edit/<int:course_id>', methods=['GET', 'POST'])
@teacher_required
def edit_course(course_id):
    """Edit a course; category, requirements and sections are replaced"""
    try:
        details = CatalogService.get_course_details(course_id)
    except NotFoundError:
        flash('El curso no existe.', 'error')
        return redirect(url_for('teacher.my_courses'))

    course = details['course']
    if course.creator_id != current_user.id:
        flash('No tienes permiso para editar este curso.', 'error')
        return redirect(url_for('teacher.my_courses'))

    if request.method == 'GET':
        form = CourseForm(obj=course)
        form.category.data = details['category'].id if details['category'] else None
    else:
        form = CourseForm()

    if form.validate_on_submit():
        requirements, sections = _submitted_children()
        try:
            CatalogService.update_course(
                course_id,
                form.course_fields(),
                category_id=form.category.data,
                requirements=requirements,
                sections=sections,
                editor_id=current_user.id
            )
            flash('Curso actualizado exitosamente.', 'success')
            return redirect(url_for('teacher.my_courses'))
        except CursaliaError as e:
            logger.error("Error updating course %s: %s", course_id, e.message)
            flash('Hubo un error al actualizar el curso.', 'error')
            return redirect(url_for('teacher.edit_course', course_id=course_id))
    elif form.is_submitted():
        flash(f'Hubo un error al actualizar el curso: {_form_errors(form)}', 'error')

    return render_template('create_course.html',
                           form=form,
                           course=course,
                           categories=CatalogService.list_categories(),
                           skills=details['requirements'],
                           sections=details['sections'])


@teacher_bp.route('/course/delete/<int:course_id>', methods=['POST'])
@teacher_required
def delete_course(course_id):
    """Delete a course owned by the current teacher"""
    try:
        CatalogService.delete_course(course_id, current_user.id)
        flash('Curso eliminado exitosamente.', 'success')
    except (NotFoundError, ForbiddenError):
        flash('No tienes permiso para eliminar este curso o el curso no existe.', 'error')
    except CursaliaError as e:
        logger.error("Error deleting course %s: %s", course_id, e.message)
        flash('Hubo un error al eliminar el curso.', 'error')

    return redirect(url_for('teacher.my_courses'))
