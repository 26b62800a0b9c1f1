"""
Public pages and the course catalog
"""
import logging

from flask import flash, render_template, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from cursalia.main import main_bp
from cursalia.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

HOME_COURSES = 3


@main_bp.route('/')
def index():
    """Home page with the latest courses"""
    try:
        courses = CatalogService.list_courses(limit=HOME_COURSES)
    except SQLAlchemyError:
        logger.exception("Error loading home page courses")
        flash('Hubo un error al cargar la página principal.', 'error')
        courses = []
    return render_template('index.html', courses=courses)


@main_bp.route('/course')
@login_required
def course_list():
    """All courses, optionally filtered by category or name"""
    category_id = request.args.get('category', type=int)
    search = request.args.get('q', '').strip() or None

    courses = CatalogService.list_courses(category_id=category_id, search=search)
    categories = CatalogService.list_categories()
    return render_template('course.html',
                           courses=courses,
                           categories=categories,
                           category_filter=category_id,
                           search=search or '')
