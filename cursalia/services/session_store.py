"""
Server-side session store keyed by opaque tokens
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from cursalia import db
from cursalia.errors import SessionError
from cursalia.models.user_session import UserSession
from cursalia.services.transaction import transaction

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Issues, resolves and destroys login sessions.

    The browser only ever holds the token (inside Flask's signed cookie);
    user id and role live in the ``user_sessions`` table.
    """

    TOKEN_BYTES = 32

    def __init__(self, lifetime: timedelta = timedelta(hours=24)):
        self.lifetime = lifetime

    def init_app(self, app):
        self.lifetime = app.config.get('SESSION_LIFETIME', self.lifetime)
        app.extensions['session_store'] = self

    def open_session(self, user) -> str:
        """Create a session for the user and return its token"""
        now = datetime.utcnow()
        token = secrets.token_urlsafe(self.TOKEN_BYTES)

        with transaction():
            UserSession.query.filter(
                UserSession.user_id == user.id,
                UserSession.expires_at <= now
            ).delete()

            db.session.add(UserSession(
                token=token,
                user_id=user.id,
                role=user.role,
                created_at=now,
                expires_at=now + self.lifetime
            ))

        logger.info("Session opened for user %s (%s)", user.id, user.role)
        return token

    def resolve(self, token: Optional[str]) -> Optional[UserSession]:
        """
        Return the live session for a token, or None

        Raises:
            SessionError: The cookie carried something that is not a token
        """
        if not token:
            return None
        if not isinstance(token, str) or len(token) > 64:
            raise SessionError('Sesión no válida')

        user_session = db.session.get(UserSession, token)
        if user_session is None:
            return None

        if user_session.is_expired():
            logger.info("Session for user %s expired", user_session.user_id)
            self.destroy(token)
            return None

        return user_session

    def destroy(self, token: Optional[str]) -> bool:
        """Delete a session. Returns False when there was nothing to delete."""
        if not token:
            return False

        with transaction():
            deleted = UserSession.query.filter_by(token=token).delete()

        if deleted:
            logger.info("Session destroyed")
        return bool(deleted)

    def purge_expired(self) -> int:
        """Remove every expired session. Returns the number removed."""
        with transaction():
            removed = UserSession.query.filter(
                UserSession.expires_at <= datetime.utcnow()
            ).delete()
        return removed
