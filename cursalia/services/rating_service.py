"""
Rating Service: one rating per user and course, plus the course aggregate
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from cursalia import db
from cursalia.errors import AlreadyRated, ValidationError
from cursalia.models.rating import Rating
from cursalia.models.user import User
from cursalia.services.catalog_service import CatalogService
from cursalia.services.transaction import transaction

logger = logging.getLogger(__name__)


class RatingService:
    """Service for course ratings"""

    MIN_RATING = 1
    MAX_RATING = 5

    @classmethod
    def _validate_value(cls, rating_value) -> int:
        try:
            value = int(str(rating_value).strip())
        except (TypeError, ValueError):
            raise ValidationError('La valoración debe ser un número entero')
        if not cls.MIN_RATING <= value <= cls.MAX_RATING:
            raise ValidationError(
                f'La valoración debe estar entre {cls.MIN_RATING} y {cls.MAX_RATING}'
            )
        return value

    @staticmethod
    def has_rated(user_id: int, course_id: int) -> bool:
        return db.session.query(
            Rating.query.filter_by(user_id=user_id, course_id=course_id).exists()
        ).scalar()

    @classmethod
    def add_rating(cls, user_id: int, course_id: int, rating_value,
                   comment: Optional[str] = None) -> Rating:
        """
        Store a user's rating for a course

        Raises:
            NotFoundError: Course does not exist
            ValidationError: Rating is not an integer between 1 and 5
            AlreadyRated: The user already rated the course
        """
        CatalogService.get_course(course_id)
        value = cls._validate_value(rating_value)
        comment = (comment or '').strip() or None

        if cls.has_rated(user_id, course_id):
            raise AlreadyRated()

        with transaction():
            rating = Rating(user_id=user_id, course_id=course_id, rating=value, comment=comment)
            db.session.add(rating)
            try:
                db.session.flush()
            except IntegrityError as e:
                raise AlreadyRated() from e

        logger.info("User %s rated course %s with %d", user_id, course_id, value)
        return rating

    @staticmethod
    def get_aggregate(course_id: int) -> dict:
        """
        Average rating (one decimal) and number of ratings

        An empty set gives an average of 0.0 and a count of 0.
        """
        average, total = db.session.query(
            func.avg(Rating.rating), func.count(Rating.id)
        ).filter(Rating.course_id == course_id).one()

        if not total:
            return {'average_rating': 0.0, 'total_ratings': 0}

        rounded = Decimal(str(average)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
        return {'average_rating': float(rounded), 'total_ratings': int(total)}

    @staticmethod
    def list_ratings(course_id: int) -> List[dict]:
        """Ratings of a course, newest first, with the rater's name"""
        rows = (
            db.session.query(Rating, User.first_name, User.last_name)
            .join(User, Rating.user_id == User.id)
            .filter(Rating.course_id == course_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .all()
        )
        return [
            {
                'rating': rating.rating,
                'comment': rating.comment,
                'created_at': rating.created_at,
                'first_name': first_name,
                'last_name': last_name
            }
            for rating, first_name, last_name in rows
        ]
