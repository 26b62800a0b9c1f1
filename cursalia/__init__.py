"""
Cursalia - Application Factory
"""
import logging
import time

from flask import Flask, g, request, session
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Initialize extensions
db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create and configure the Flask application"""
    from cursalia.config import get_config
    from cursalia.logging_config import setup_logging
    from cursalia.services.session_store import SessionStore

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    setup_logging(app.config.get('LOG_LEVEL'), app.config.get('LOG_DIR'))

    # Initialize extensions with app
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    SessionStore().init_app(app)

    # Import models so metadata is complete before any create_all()
    from cursalia import models  # noqa: F401

    if app.config.get('AUTO_INIT_DB'):
        with app.app_context():
            _auto_initialize_database()

    # Register blueprints
    from cursalia.auth import auth_bp
    from cursalia.main import main_bp
    from cursalia.teacher import teacher_bp
    from cursalia.student import student_bp
    from cursalia.profile import profile_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(teacher_bp)
    app.register_blueprint(student_bp)
    app.register_blueprint(profile_bp)

    from cursalia.errors import register_error_handlers
    register_error_handlers(app)

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop('request_started', None)
        if started is not None:
            ms = int((time.perf_counter() - started) * 1000)
            logger.info("%s %s -> %s (%dms)", request.method, request.path, response.status_code, ms)
        return response

    @app.context_processor
    def inject_session_user():
        from flask_login import current_user
        return {
            'userId': current_user.id if current_user.is_authenticated else None,
            'userRole': current_user.role if current_user.is_authenticated else None,
        }

    return app


DEFAULT_CATEGORIES = [
    'Programación',
    'Diseño',
    'Marketing',
    'Negocios',
    'Idiomas',
    'Ciencia de datos',
]


def seed_categories():
    """Insert the default categories that are still missing. Returns how many were added."""
    from cursalia.models.course import Category

    existing = {name for (name,) in db.session.query(Category.name).all()}
    added = 0
    for name in DEFAULT_CATEGORIES:
        if name not in existing:
            db.session.add(Category(name=name))
            added += 1
    db.session.commit()
    return added


def _auto_initialize_database():
    """Create tables and default categories on a fresh installation"""
    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError

    try:
        tables = inspect(db.engine).get_table_names()
        if 'users' not in tables:
            logger.info("New installation detected, creating database tables")
            db.create_all()
        added = seed_categories()
        if added:
            logger.info("Seeded %d default categories", added)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning("Auto-initialization skipped: %s", e)


@login_manager.request_loader
def load_user_from_session_token(req):
    """Resolve the opaque session token stored in the signed cookie"""
    from flask import current_app
    from cursalia.errors import SessionError

    token = session.get('session_token')
    if not token:
        return None

    store = current_app.extensions['session_store']
    try:
        user_session = store.resolve(token)
    except SessionError as e:
        logger.warning("Discarding session cookie: %s", e.message)
        user_session = None

    if user_session is None:
        session.pop('session_token', None)
        return None

    g.user_session = user_session
    return user_session.user


@login_manager.unauthorized_handler
def handle_unauthorized():
    """JSON callers get a 401, pages are sent to the sign in modal"""
    from flask import jsonify, redirect, url_for
    from cursalia.errors import wants_json

    if wants_json():
        return jsonify({'authenticated': False, 'message': 'Debes iniciar sesión'}), 401
    return redirect(url_for('main.index', login='true'))
