"""
Account Service: registration, authentication and profile lookup
"""
import logging
from datetime import datetime

from email_validator import validate_email, EmailNotValidError
from flask import current_app
from sqlalchemy.exc import IntegrityError

from cursalia import db
from cursalia.errors import (
    DuplicateEmail, InvalidCredential, NotFoundError, ValidationError, WeakCredential
)
from cursalia.models.user import User
from cursalia.services.transaction import transaction

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """
    Validate an email address and return its normalized form

    Raises:
        WeakCredential: If the address is not syntactically valid
    """
    try:
        return validate_email((email or '').strip(), check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise WeakCredential(f'Correo electrónico no válido: {e}') from e


class AccountService:
    """Service for user identity records"""

    @staticmethod
    def _min_password_length() -> int:
        return current_app.config.get('MIN_PASSWORD_LENGTH', 6)

    @classmethod
    def register(cls, name: str, lastname: str, email: str, password: str, role: str) -> User:
        """
        Register a new user

        Args:
            name: First name
            lastname: Last name
            email: Email address, must be unique
            password: Plain text password, hashed before storage
            role: 'student' or 'teacher'

        Returns:
            The created User

        Raises:
            ValidationError: Blank name or unknown role
            WeakCredential: Invalid email or too short password
            DuplicateEmail: Email already registered
        """
        name = (name or '').strip()
        if not name:
            raise ValidationError('El nombre es obligatorio')
        if role not in User.ROLES:
            raise ValidationError('Rol no válido')

        email = normalize_email(email)
        if not password or len(password) < cls._min_password_length():
            raise WeakCredential(
                f'La contraseña debe tener al menos {cls._min_password_length()} caracteres'
            )

        if User.query.filter_by(email=email).first():
            raise DuplicateEmail()

        with transaction():
            user = User(
                first_name=name,
                last_name=(lastname or '').strip(),
                email=email,
                role=role
            )
            user.set_password(password)
            db.session.add(user)
            try:
                db.session.flush()
            except IntegrityError as e:
                raise DuplicateEmail() from e

        logger.info("Registered user %s as %s", user.id, role)
        return user

    @staticmethod
    def authenticate(email: str, password: str) -> User:
        """
        Check credentials and return the matching user

        Raises:
            NotFoundError: No user with that email
            InvalidCredential: Password does not match
        """
        try:
            email = normalize_email(email)
        except WeakCredential:
            email = (email or '').strip()

        user = User.query.filter_by(email=email).first()
        if user is None:
            raise NotFoundError('Usuario no encontrado')

        if not password or not user.check_password(password):
            raise InvalidCredential()

        with transaction():
            user.last_login = datetime.utcnow()

        return user

    @staticmethod
    def logout(token) -> bool:
        """Destroy the session behind a token. Safe to call when already signed out."""
        return current_app.extensions['session_store'].destroy(token)

    @staticmethod
    def get_user(user_id: int) -> User:
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError('Usuario no encontrado')
        return user

    @classmethod
    def get_profile(cls, user_id: int) -> dict:
        """Return the user's public fields (no password hash)"""
        return cls.get_user(user_id).to_dict()
