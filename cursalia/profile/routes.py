"""
Profile routes
"""
import logging

from flask import render_template, jsonify
from flask_login import login_required, current_user

from cursalia.errors import CursaliaError
from cursalia.helpers import request_data
from cursalia.models.user import User
from cursalia.profile import profile_bp
from cursalia.services.account_service import AccountService
from cursalia.services.enrollment_service import EnrollmentService
from cursalia.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


@profile_bp.route('/profile')
@login_required
def profile():
    """Profile page with course progress (students) and links"""
    user = AccountService.get_profile(current_user.id)

    courses_progress = []
    if user['role'] == User.ROLE_STUDENT:
        courses_progress = EnrollmentService.list_user_progress(current_user.id)

    return render_template('profile.html',
                           user=user,
                           coursesProgress=courses_progress,
                           userLinks=ProfileService.list_links(current_user.id))


@profile_bp.route('/profile/save', methods=['POST'])
@login_required
def save_profile():
    """Save profile fields, add a link or edit a link depending on ``action``"""
    data = request_data()
    action = data.get('action')

    try:
        if action == 'saveProfile':
            ProfileService.update_profile(
                current_user.id,
                data.get('firstName'),
                data.get('lastName'),
                data.get('email'),
                data.get('biography')
            )
            return jsonify({'message': 'Cambios de perfil guardados correctamente.'}), 200

        if action == 'addLink':
            ProfileService.add_link(current_user.id, data.get('linkName'), data.get('linkUrl'))
            return jsonify({'message': 'Enlace agregado correctamente.'}), 200

        if action == 'editLink':
            ProfileService.edit_link(current_user.id, data.get('linkId'),
                                     data.get('linkName'), data.get('linkUrl'))
            return jsonify({'message': 'Enlace actualizado correctamente.'}), 200
    except CursaliaError as e:
        if e.status_code >= 500:
            logger.error("Error saving profile of user %s: %s", current_user.id, e.message)
            return jsonify({'message': 'Hubo un error al procesar tu solicitud.'}), 500
        return jsonify({'message': e.message}), e.status_code

    return jsonify({'message': 'Acción no válida.'}), 400


@profile_bp.route('/profile/delete-link', methods=['POST'])
@login_required
def delete_link():
    data = request_data()
    try:
        ProfileService.delete_link(current_user.id, data.get('deleteLinkId'))
    except CursaliaError as e:
        if e.status_code >= 500:
            return jsonify({'message': 'Error al eliminar el enlace.'}), 500
        return jsonify({'message': e.message}), e.status_code

    return jsonify({'message': 'Enlace eliminado correctamente.'}), 200
