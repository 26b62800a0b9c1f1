"""
Unit of work around the Flask-SQLAlchemy session
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from cursalia import db
from cursalia.errors import CursaliaError, PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def transaction():
    """
    Run the enclosed writes as a single unit.

    Commits when the block finishes; any exception rolls the whole set back
    before it propagates. Storage errors are logged and surfaced as
    PersistenceError so callers never see a half-applied write.
    """
    try:
        yield db.session
        db.session.commit()
    except CursaliaError:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Transaction rolled back")
        raise PersistenceError() from e
    except Exception:
        db.session.rollback()
        raise
