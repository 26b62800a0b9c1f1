"""
Authentication routes
"""
import logging

from flask import current_app, jsonify, redirect, session, url_for
from flask_login import current_user

from cursalia.auth import auth_bp
from cursalia.errors import CursaliaError, InvalidCredential, NotFoundError, PersistenceError
from cursalia.helpers import request_data
from cursalia.services.account_service import AccountService

logger = logging.getLogger(__name__)

LOGIN_FAILED = 'Error al iniciar sesión. Verifica tus credenciales e inténtalo de nuevo.'


def _start_session(user):
    """Open a server-side session and keep only its token in the cookie"""
    store = current_app.extensions['session_store']
    old_token = session.get('session_token')
    if old_token:
        store.destroy(old_token)

    token = store.open_session(user)
    session.clear()
    session['session_token'] = token
    session.permanent = True


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Register a new student or teacher and sign them in"""
    data = request_data()
    try:
        user = AccountService.register(
            data.get('name'),
            data.get('lastname'),
            data.get('email'),
            data.get('password'),
            data.get('role')
        )
        _start_session(user)
    except PersistenceError as e:
        return jsonify({'error': e.message, 'message': e.message}), 500
    except CursaliaError as e:
        logger.info("Signup rejected: %s", e.message)
        return jsonify({'error': e.message, 'message': e.message}), 400

    return jsonify({'message': 'Registro exitoso', 'redirect': '/'}), 200


@auth_bp.route('/signin', methods=['POST'])
def signin():
    """Check credentials and open a session"""
    data = request_data()
    try:
        user = AccountService.authenticate(data.get('email'), data.get('password'))
        _start_session(user)
    except (NotFoundError, InvalidCredential) as e:
        logger.info("Sign in failed: %s", e.message)
        return jsonify({'error': LOGIN_FAILED, 'message': LOGIN_FAILED}), 401
    except CursaliaError as e:
        logger.error("Sign in error: %s", e.message)
        return jsonify({'error': e.message, 'message': e.message}), e.status_code

    return jsonify({'message': 'Inicio de sesión exitoso', 'redirect': '/'}), 200


@auth_bp.route('/logout')
def logout():
    """Destroy the session; safe to call when already signed out"""
    try:
        AccountService.logout(session.get('session_token'))
    except PersistenceError:
        return jsonify({'error': 'Error en el servidor al cerrar sesión'}), 500
    session.clear()
    return redirect(url_for('main.index'))


@auth_bp.route('/check-auth')
def check_auth():
    if current_user.is_authenticated:
        return jsonify({'authenticated': True}), 200
    return jsonify({'authenticated': False}), 401
