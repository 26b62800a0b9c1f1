"""
Catalog Service: course, category, requirement and section records
"""
import logging
from typing import Iterable, List, Optional, Tuple

from cursalia import db
from cursalia.errors import ForbiddenError, NotFoundError, ValidationError
from cursalia.models.course import Course, Category, CourseCategory, Requirement, Section
from cursalia.models.enrollment import Enrollment, CourseProgress
from cursalia.models.rating import Rating
from cursalia.models.user import User
from cursalia.services.transaction import transaction

logger = logging.getLogger(__name__)

COURSE_FIELDS = ('name', 'description', 'language', 'cover_image')


class CatalogService:
    """Service for the course catalog owned by teachers"""

    @staticmethod
    def _clean_fields(fields: dict) -> dict:
        cleaned = {key: (fields.get(key) or '').strip() or None for key in COURSE_FIELDS}
        if not cleaned['name']:
            raise ValidationError('El nombre del curso es obligatorio')
        return cleaned

    @staticmethod
    def _clean_requirements(requirements: Optional[Iterable[str]]) -> List[str]:
        return [text.strip() for text in (requirements or []) if text and text.strip()]

    @staticmethod
    def _clean_sections(sections: Optional[Iterable[Tuple[str, str]]]) -> List[Tuple[str, str]]:
        """Keep only (title, url) pairs where both parts are present"""
        cleaned = []
        for title, url in sections or []:
            title = (title or '').strip()
            url = (url or '').strip()
            if title and url:
                cleaned.append((title, url))
        return cleaned

    @staticmethod
    def _resolve_category(category_id) -> Optional[int]:
        if category_id in (None, '', 0, '0'):
            return None
        try:
            category_id = int(category_id)
        except (TypeError, ValueError):
            raise ValidationError('Categoría no válida')
        if db.session.get(Category, category_id) is None:
            raise ValidationError('La categoría no existe')
        return category_id

    @staticmethod
    def _insert_children(course_id: int, category_id: Optional[int],
                         requirements: List[str], sections: List[Tuple[str, str]]):
        if category_id:
            db.session.add(CourseCategory(course_id=course_id, category_id=category_id))

        for position, text in enumerate(requirements):
            db.session.add(Requirement(course_id=course_id, position=position, requirement_text=text))

        for position, (title, url) in enumerate(sections):
            db.session.add(Section(course_id=course_id, position=position, title=title, video_url=url))

    @staticmethod
    def get_course(course_id: int) -> Course:
        course = db.session.get(Course, course_id)
        if course is None:
            raise NotFoundError('El curso no existe.')
        return course

    @classmethod
    def create_course(cls, creator_id: int, fields: dict, category_id=None,
                      requirements: Optional[Iterable[str]] = None,
                      sections: Optional[Iterable[Tuple[str, str]]] = None) -> Course:
        """
        Create a course with its category link, requirements and sections

        Args:
            creator_id: Teacher creating the course
            fields: name, description, language, cover_image
            category_id: Optional category id
            requirements: Requirement texts, blanks are skipped
            sections: (title, video_url) pairs, incomplete pairs are skipped

        Returns:
            The created Course

        Raises:
            ValidationError: Missing name or unknown category
        """
        cleaned = cls._clean_fields(fields)
        category_id = cls._resolve_category(category_id)
        requirements = cls._clean_requirements(requirements)
        sections = cls._clean_sections(sections)

        with transaction():
            course = Course(creator_id=creator_id, **cleaned)
            db.session.add(course)
            db.session.flush()  # Get course ID
            cls._insert_children(course.id, category_id, requirements, sections)

        logger.info("Course %s created by user %s (%d requirements, %d sections)",
                    course.id, creator_id, len(requirements), len(sections))
        return course

    @classmethod
    def update_course(cls, course_id: int, fields: dict, category_id=None,
                      requirements: Optional[Iterable[str]] = None,
                      sections: Optional[Iterable[Tuple[str, str]]] = None,
                      editor_id: Optional[int] = None) -> Course:
        """
        Update a course and replace its category link, requirements and sections

        Raises:
            NotFoundError: Course does not exist
            ForbiddenError: editor_id given and not the creator
            ValidationError: Missing name or unknown category
        """
        course = cls.get_course(course_id)
        if editor_id is not None and course.creator_id != editor_id:
            raise ForbiddenError('No tienes permiso para editar este curso.')

        cleaned = cls._clean_fields(fields)
        category_id = cls._resolve_category(category_id)
        requirements = cls._clean_requirements(requirements)
        sections = cls._clean_sections(sections)

        with transaction():
            for key, value in cleaned.items():
                setattr(course, key, value)

            CourseCategory.query.filter_by(course_id=course_id).delete()
            Requirement.query.filter_by(course_id=course_id).delete()
            # Replaced sections get new ids
            CourseProgress.query.filter_by(course_id=course_id).update({'last_viewed_section': None})
            Section.query.filter_by(course_id=course_id).delete()
            cls._insert_children(course_id, category_id, requirements, sections)

        logger.info("Course %s updated", course_id)
        return course

    @classmethod
    def delete_course(cls, course_id: int, requesting_user_id: int) -> None:
        """
        Delete a course and every row that depends on it, children first

        Raises:
            NotFoundError: Course does not exist
            ForbiddenError: Requesting user is not the creator
        """
        course = cls.get_course(course_id)
        if course.creator_id != requesting_user_id:
            raise ForbiddenError('No tienes permiso para eliminar este curso.')

        with transaction():
            for model in (Rating, CourseProgress, Enrollment, Section, Requirement, CourseCategory):
                model.query.filter_by(course_id=course_id).delete()
            Course.query.filter_by(id=course_id).delete()

        logger.info("Course %s deleted by user %s", course_id, requesting_user_id)

    @staticmethod
    def list_courses(creator_id: Optional[int] = None, category_id: Optional[int] = None,
                     search: Optional[str] = None, limit: Optional[int] = None) -> List[dict]:
        """
        List courses with their category and creator names

        Args:
            creator_id: Only courses created by this user
            category_id: Only courses in this category
            search: Case-insensitive substring of the course name
            limit: Maximum number of courses, newest first
        """
        query = (
            db.session.query(Course, Category.name, User.first_name, User.last_name)
            .join(User, Course.creator_id == User.id)
            .outerjoin(CourseCategory, CourseCategory.course_id == Course.id)
            .outerjoin(Category, Category.id == CourseCategory.category_id)
        )

        if creator_id is not None:
            query = query.filter(Course.creator_id == creator_id)
        if category_id:
            query = query.filter(CourseCategory.category_id == category_id)
        if search:
            query = query.filter(Course.name.ilike(f'%{search.strip()}%'))

        query = query.order_by(Course.creation_date.desc(), Course.id.desc())
        if limit:
            query = query.limit(limit)

        return [
            {
                'course': course,
                'category_name': category_name,
                'creator_name': f'{first_name} {last_name}'.strip()
            }
            for course, category_name, first_name, last_name in query.all()
        ]

    @classmethod
    def get_course_details(cls, course_id: int) -> dict:
        """
        Course with category, ordered requirements and sections

        Raises:
            NotFoundError: Course does not exist
        """
        course = cls.get_course(course_id)
        return {
            'course': course,
            'category': course.category,
            'requirements': [r.requirement_text for r in course.requirements],
            'sections': list(course.sections),
            'creator': course.creator
        }

    @staticmethod
    def list_categories() -> List[Category]:
        return Category.query.order_by(Category.name).all()
