"""
Services package
"""
from cursalia.services.account_service import AccountService
from cursalia.services.catalog_service import CatalogService
from cursalia.services.enrollment_service import EnrollmentService
from cursalia.services.profile_service import ProfileService
from cursalia.services.rating_service import RatingService
from cursalia.services.session_store import SessionStore
from cursalia.services.video_service import VideoService

__all__ = [
    'AccountService',
    'CatalogService',
    'EnrollmentService',
    'ProfileService',
    'RatingService',
    'SessionStore',
    'VideoService'
]
