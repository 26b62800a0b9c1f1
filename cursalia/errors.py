"""
Application errors and the request-boundary handlers that translate them
"""
import logging

from flask import jsonify, render_template, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class CursaliaError(Exception):
    """Base class for errors raised by the services layer"""
    status_code = 500
    default_message = 'Error en el servidor'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(CursaliaError):
    status_code = 400
    default_message = 'Datos no válidos'


class WeakCredential(ValidationError):
    default_message = 'El correo electrónico o la contraseña no son válidos'


class DuplicateError(CursaliaError):
    status_code = 400
    default_message = 'El registro ya existe'


class DuplicateEmail(DuplicateError):
    default_message = 'El correo electrónico ya está registrado'


class AlreadyEnrolled(DuplicateError):
    default_message = 'Ya estás inscrito en este curso'


class AlreadyRated(DuplicateError):
    default_message = 'Ya has valorado este curso.'


class NotFoundError(CursaliaError):
    status_code = 404
    default_message = 'Recurso no encontrado'


class InvalidCredential(CursaliaError):
    status_code = 401
    default_message = 'Contraseña incorrecta'


class ForbiddenError(CursaliaError):
    status_code = 403
    default_message = 'No tienes permiso para realizar esta acción'


class PersistenceError(CursaliaError):
    status_code = 500
    default_message = 'Error en el servidor al guardar los datos'


class SessionError(CursaliaError):
    status_code = 401
    default_message = 'Sesión no disponible'


def wants_json():
    """True when the caller expects a JSON body rather than an HTML page"""
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(['application/json', 'text/html'])
    return best == 'application/json' and request.accept_mimetypes[best] > request.accept_mimetypes['text/html']


def register_error_handlers(app):
    """Last-resort handlers for errors that escaped a route"""

    @app.errorhandler(CursaliaError)
    def handle_cursalia_error(error):
        if error.status_code >= 500:
            logger.error("Unhandled %s on %s %s: %s", type(error).__name__, request.method, request.path, error)
        if wants_json():
            return jsonify({'success': False, 'message': error.message}), error.status_code
        return render_template('error.html', message=error.message, status=error.status_code), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if wants_json():
            return jsonify({'success': False, 'message': error.description}), error.code
        return render_template('error.html', message=error.description, status=error.code), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unexpected error on %s %s", request.method, request.path)
        message = 'Algo salió mal'
        if wants_json():
            return jsonify({'success': False, 'message': message}), 500
        return render_template('error.html', message=message, status=500), 500
