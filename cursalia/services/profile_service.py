"""
Profile Service: profile edits and social links
"""
import logging
from typing import List
from urllib.parse import urlparse

from sqlalchemy.exc import IntegrityError

from cursalia import db
from cursalia.errors import DuplicateEmail, DuplicateError, NotFoundError, ValidationError
from cursalia.models.user import User, UserLink
from cursalia.services.account_service import AccountService, normalize_email
from cursalia.services.transaction import transaction

logger = logging.getLogger(__name__)


def _clean_link(name: str, url: str) -> tuple:
    name = (name or '').strip()
    url = (url or '').strip()
    if not name or not url:
        raise ValidationError('El nombre y la URL del enlace son obligatorios')
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValidationError('La URL del enlace no es válida')
    return name, url


class ProfileService:
    """Service for the user's own profile page"""

    @staticmethod
    def update_profile(user_id: int, first_name: str, last_name: str,
                       email: str, biography: str = None) -> User:
        """
        Save profile fields

        Raises:
            NotFoundError: User does not exist
            ValidationError: Blank first name
            WeakCredential: Invalid email
            DuplicateEmail: Email belongs to another user
        """
        user = AccountService.get_user(user_id)
        first_name = (first_name or '').strip()
        if not first_name:
            raise ValidationError('El nombre es obligatorio')

        email = normalize_email(email)
        other = User.query.filter(User.email == email, User.id != user_id).first()
        if other:
            raise DuplicateEmail()

        with transaction():
            user.first_name = first_name
            user.last_name = (last_name or '').strip()
            user.email = email
            user.biography = (biography or '').strip() or None
            try:
                db.session.flush()
            except IntegrityError as e:
                raise DuplicateEmail() from e

        logger.info("Profile of user %s updated", user_id)
        return user

    @staticmethod
    def list_links(user_id: int) -> List[UserLink]:
        return UserLink.query.filter_by(user_id=user_id).order_by(UserLink.id).all()

    @staticmethod
    def add_link(user_id: int, link_name: str, link_url: str) -> UserLink:
        """
        Raises:
            ValidationError: Blank name or non http(s) URL
            DuplicateError: The same link is already on the profile
        """
        link_name, link_url = _clean_link(link_name, link_url)

        existing = UserLink.query.filter_by(user_id=user_id, link_name=link_name, link_url=link_url).first()
        if existing:
            raise DuplicateError('Este enlace ya ha sido agregado.')

        with transaction():
            link = UserLink(user_id=user_id, link_name=link_name, link_url=link_url)
            db.session.add(link)
            try:
                db.session.flush()
            except IntegrityError as e:
                raise DuplicateError('Este enlace ya ha sido agregado.') from e

        return link

    @staticmethod
    def _get_own_link(user_id: int, link_id) -> UserLink:
        try:
            link_id = int(link_id)
        except (TypeError, ValueError):
            raise NotFoundError('Enlace no encontrado.')
        link = UserLink.query.filter_by(id=link_id, user_id=user_id).first()
        if link is None:
            raise NotFoundError('Enlace no encontrado o no tienes permiso para modificarlo.')
        return link

    @classmethod
    def edit_link(cls, user_id: int, link_id, link_name: str, link_url: str) -> UserLink:
        link = cls._get_own_link(user_id, link_id)
        link_name, link_url = _clean_link(link_name, link_url)

        with transaction():
            link.link_name = link_name
            link.link_url = link_url
            try:
                db.session.flush()
            except IntegrityError as e:
                raise DuplicateError('Este enlace ya ha sido agregado.') from e

        return link

    @classmethod
    def delete_link(cls, user_id: int, link_id) -> None:
        link = cls._get_own_link(user_id, link_id)
        with transaction():
            db.session.delete(link)
