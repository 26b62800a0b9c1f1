"""
Enrollment Service: enrollment, progress computation and last viewed section
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError

from cursalia import db
from cursalia.errors import AlreadyEnrolled, NotFoundError, ValidationError
from cursalia.models.course import Course, Section
from cursalia.models.enrollment import Enrollment, CourseProgress
from cursalia.services.catalog_service import CatalogService
from cursalia.services.transaction import transaction

logger = logging.getLogger(__name__)


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f'{name} debe ser un número entero')
    try:
        # int() would truncate 1.5; going through str rejects it
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{name} debe ser un número entero')


def compute_progress(completed_sections, total_sections) -> int:
    """
    Percentage of completed sections, rounded down

    Raises:
        ValidationError: total is not positive or completed is outside [0, total]
    """
    completed = _as_int(completed_sections, 'completedSections')
    total = _as_int(total_sections, 'totalSections')

    if total <= 0:
        raise ValidationError('El curso no tiene secciones para calcular el progreso')
    if completed < 0 or completed > total:
        raise ValidationError('completedSections debe estar entre 0 y totalSections')

    return (100 * completed) // total


class EnrollmentService:
    """Service for the enrollment and progress workflow"""

    @staticmethod
    def player_url(course_id: int) -> str:
        return f'/course_player/{course_id}'

    @staticmethod
    def get_enrollment(user_id: int, course_id: int) -> Optional[Enrollment]:
        return Enrollment.query.filter_by(user_id=user_id, course_id=course_id).first()

    @classmethod
    def is_enrolled(cls, user_id: int, course_id: int) -> bool:
        return cls.get_enrollment(user_id, course_id) is not None

    @classmethod
    def enroll(cls, user_id: int, course_id: int) -> dict:
        """
        Enroll a user in a course and start its progress at zero

        Returns:
            Dict with the enrollment and the URL of the course player

        Raises:
            NotFoundError: Course does not exist
            AlreadyEnrolled: The user already has an enrollment for the course
        """
        CatalogService.get_course(course_id)

        with transaction():
            if cls.get_enrollment(user_id, course_id):
                raise AlreadyEnrolled()

            progress = CourseProgress.query.filter_by(user_id=user_id, course_id=course_id).first()

            enrollment = Enrollment(
                user_id=user_id,
                course_id=course_id,
                enrollment_date=datetime.utcnow(),
                progress=0,
                status=Enrollment.STATUS_ENROLLED
            )
            db.session.add(enrollment)
            if progress is None:
                db.session.add(CourseProgress(user_id=user_id, course_id=course_id, progress=0))
            else:
                progress.progress = 0
                progress.last_viewed_section = None

            try:
                db.session.flush()
            except IntegrityError as e:
                # A concurrent request inserted the same pair first
                raise AlreadyEnrolled() from e

        logger.info("User %s enrolled in course %s", user_id, course_id)
        return {
            'enrollment': enrollment,
            'redirect_url': cls.player_url(course_id)
        }

    @classmethod
    def update_progress(cls, user_id: int, course_id: int, last_viewed_section,
                        completed_sections, total_sections) -> int:
        """
        Store the learner's progress in both the progress and enrollment rows

        Args:
            user_id: Learner
            course_id: Course being followed
            last_viewed_section: Section id the learner is on (may be None)
            completed_sections: Number of sections completed
            total_sections: Number of sections in the course

        Returns:
            The stored progress percentage

        Raises:
            ValidationError: Bad counts or a section from another course
            NotFoundError: The user is not enrolled in the course
        """
        progress_value = compute_progress(completed_sections, total_sections)

        section_id = None
        if last_viewed_section not in (None, ''):
            section_id = _as_int(last_viewed_section, 'lastViewedSection')
            section = db.session.get(Section, section_id)
            if section is None or section.course_id != course_id:
                raise ValidationError('La sección no pertenece a este curso')

        with transaction():
            enrollment = cls.get_enrollment(user_id, course_id)
            if enrollment is None:
                raise NotFoundError('No estás inscrito en este curso')

            progress = CourseProgress.query.filter_by(user_id=user_id, course_id=course_id).first()
            if progress is None:
                progress = CourseProgress(user_id=user_id, course_id=course_id)
                db.session.add(progress)

            progress.progress = progress_value
            if section_id is not None:
                progress.last_viewed_section = section_id
            enrollment.progress = progress_value

        logger.info("Progress of user %s in course %s set to %d%%", user_id, course_id, progress_value)
        return progress_value

    @staticmethod
    def get_progress(user_id: int, course_id: int) -> dict:
        """
        Current progress and last viewed section

        Defaults to 0% and the first section when nothing was recorded yet.

        Raises:
            NotFoundError: Course does not exist
        """
        course = CatalogService.get_course(course_id)
        record = CourseProgress.query.filter_by(user_id=user_id, course_id=course_id).first()

        first_section = course.sections[0].id if course.sections else None
        if record is None:
            return {'progress': 0, 'last_viewed_section': first_section}

        return {
            'progress': record.progress or 0,
            'last_viewed_section': record.last_viewed_section or first_section
        }

    @staticmethod
    def list_user_progress(user_id: int) -> List[dict]:
        """Enrolled courses of a user with their progress and status"""
        rows = (
            db.session.query(Course.id, Course.name, CourseProgress.progress, Enrollment.status)
            .join(Enrollment, Enrollment.course_id == Course.id)
            .outerjoin(CourseProgress, and_(
                CourseProgress.user_id == Enrollment.user_id,
                CourseProgress.course_id == Enrollment.course_id
            ))
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.enrollment_date.desc())
            .all()
        )
        return [
            {
                'course_id': course_id,
                'course_name': name,
                'progress': progress or 0,
                'status': status
            }
            for course_id, name, progress, status in rows
        ]
