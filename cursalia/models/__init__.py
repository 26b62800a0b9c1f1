"""
Database models
"""
from cursalia.models.user import User, UserLink
from cursalia.models.user_session import UserSession
from cursalia.models.course import Course, Category, CourseCategory, Requirement, Section
from cursalia.models.enrollment import Enrollment, CourseProgress
from cursalia.models.rating import Rating

__all__ = [
    'User',
    'UserLink',
    'UserSession',
    'Course',
    'Category',
    'CourseCategory',
    'Requirement',
    'Section',
    'Enrollment',
    'CourseProgress',
    'Rating'
]
