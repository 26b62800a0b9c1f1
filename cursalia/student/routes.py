"""
Student routes: course details, player, enrollment, progress and ratings
"""
import logging

from flask import render_template, redirect, url_for, flash, jsonify
from flask_login import login_required, current_user

from cursalia.errors import (
    AlreadyEnrolled, AlreadyRated, CursaliaError, NotFoundError, PersistenceError, ValidationError
)
from cursalia.helpers import request_data
from cursalia.services.catalog_service import CatalogService
from cursalia.services.enrollment_service import EnrollmentService
from cursalia.services.rating_service import RatingService
from cursalia.services.video_service import VideoService
from cursalia.student import student_bp
from cursalia.student.forms import RatingForm

logger = logging.getLogger(__name__)


def _can_open_player(course, user_id):
    return course.creator_id == user_id or EnrollmentService.is_enrolled(user_id, course.id)


def _player_context(course_id, form=None):
    """Everything the course player template needs for the current user"""
    details = CatalogService.get_course_details(course_id)
    sections = [
        {
            'section_id': section.id,
            'title': section.title,
            'video_url': VideoService.embed_url(section.video_url)
        }
        for section in details['sections']
    ]

    progress = EnrollmentService.get_progress(current_user.id, course_id)
    current_section = progress['last_viewed_section']
    current_video_url = next(
        (s['video_url'] for s in sections if s['section_id'] == current_section),
        sections[0]['video_url'] if sections else ''
    )
    aggregate = RatingService.get_aggregate(course_id)

    return {
        'course': details['course'],
        'category': details['category'],
        'sections': sections,
        'currentSection': current_section,
        'currentSectionVideoUrl': current_video_url,
        'currentProgress': progress['progress'],
        'ratings': RatingService.list_ratings(course_id),
        'averageRating': f"{aggregate['average_rating']:.1f}",
        'totalRatings': aggregate['total_ratings'],
        'hasRated': RatingService.has_rated(current_user.id, course_id),
        'enrollment': EnrollmentService.get_enrollment(current_user.id, course_id),
        'form': form or RatingForm(formdata=None)
    }


@student_bp.route('/course_details/<int:course_id>')
@login_required
def course_details(course_id):
    """Course presentation page with the enroll button"""
    try:
        details = CatalogService.get_course_details(course_id)
    except NotFoundError:
        flash('El curso no existe.', 'error')
        return redirect(url_for('main.course_list'))

    return render_template('course_details.html',
                           details=details,
                           course=details['course'],
                           hasStarted=EnrollmentService.is_enrolled(current_user.id, course_id),
                           aggregate=RatingService.get_aggregate(course_id))


@student_bp.route('/course_player/<int:course_id>')
@login_required
def course_player(course_id):
    """Video player with progress and ratings"""
    try:
        course = CatalogService.get_course(course_id)
    except NotFoundError:
        flash('El curso no existe.', 'error')
        return redirect(url_for('main.course_list'))

    if not _can_open_player(course, current_user.id):
        flash('Debes inscribirte en el curso para verlo.', 'error')
        return redirect(url_for('student.course_details', course_id=course_id))

    return render_template('course_player.html', **_player_context(course_id))


@student_bp.route('/course/<int:course_id>/enroll', methods=['POST'])
@login_required
def enroll(course_id):
    """Enroll the current user in a course"""
    try:
        result = EnrollmentService.enroll(current_user.id, course_id)
    except AlreadyEnrolled as e:
        return jsonify({
            'success': False,
            'message': e.message,
            'redirectUrl': EnrollmentService.player_url(course_id)
        }), 400
    except NotFoundError as e:
        return jsonify({'success': False, 'message': e.message}), 404
    except PersistenceError:
        return jsonify({
            'success': False,
            'message': 'Error en el servidor al procesar la inscripción'
        }), 500

    return jsonify({
        'success': True,
        'message': 'Inscripción exitosa',
        'redirectUrl': result['redirect_url']
    }), 201


@student_bp.route('/course/<int:course_id>/update-progress', methods=['POST'])
@login_required
def update_progress(course_id):
    """Record the sections completed and the last one viewed"""
    data = request_data()
    try:
        progress = EnrollmentService.update_progress(
            current_user.id,
            course_id,
            data.get('lastViewedSection'),
            data.get('completedSections'),
            data.get('totalSections')
        )
    except CursaliaError as e:
        if e.status_code >= 500:
            logger.error("Error updating progress of user %s in course %s: %s",
                         current_user.id, course_id, e.message)
        return jsonify({'success': False, 'message': e.message}), e.status_code

    return jsonify({'success': True, 'progress': progress})


@student_bp.route('/rate_course', methods=['POST'])
@login_required
def rate_course():
    """Add the current user's rating and show the player with the new aggregate"""
    form = RatingForm()

    if not form.validate_on_submit():
        flash('Faltan campos obligatorios.', 'error')
        if form.course_id.data:
            return redirect(url_for('student.course_player', course_id=form.course_id.data))
        return redirect(url_for('main.course_list'))

    course_id = form.course_id.data
    player_url = url_for('student.course_player', course_id=course_id)

    if form.user_id.data and form.user_id.data != current_user.id:
        flash('No puedes valorar un curso en nombre de otro usuario.', 'error')
        return redirect(player_url)

    try:
        course = CatalogService.get_course(course_id)
        if not _can_open_player(course, current_user.id):
            flash('Debes inscribirte en el curso para valorarlo.', 'error')
            return redirect(url_for('student.course_details', course_id=course_id))

        RatingService.add_rating(current_user.id, course_id, form.rating.data, form.comment.data)
    except NotFoundError:
        flash('El curso no existe.', 'error')
        return redirect(url_for('main.course_list'))
    except (AlreadyRated, ValidationError) as e:
        flash(e.message, 'error')
        return redirect(player_url)
    except PersistenceError:
        flash('Hubo un error al añadir la valoración.', 'error')
        return redirect(player_url)

    flash('Valoración añadida correctamente.', 'success')
    return render_template('course_player.html', **_player_context(course_id))
