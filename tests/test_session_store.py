from datetime import datetime, timedelta

import pytest
from flask import current_app

from cursalia import db
from cursalia.errors import SessionError
from cursalia.models.user import User
from cursalia.models.user_session import UserSession


def _store():
    return current_app.extensions['session_store']


def test_open_and_resolve_session(ctx):
    user = db.session.get(User, ctx['student_id'])
    token = _store().open_session(user)

    assert len(token) >= 32
    user_session = _store().resolve(token)
    assert user_session.user_id == user.id
    assert user_session.role == User.ROLE_STUDENT


def test_tokens_are_unique(ctx):
    user = db.session.get(User, ctx['student_id'])
    tokens = {_store().open_session(user) for _ in range(5)}

    assert len(tokens) == 5


def test_unknown_token_resolves_to_none(ctx):
    assert _store().resolve('no-existe') is None
    assert _store().resolve(None) is None


def test_destroy_is_idempotent(ctx):
    user = db.session.get(User, ctx['teacher_id'])
    token = _store().open_session(user)

    assert _store().destroy(token) is True
    assert _store().destroy(token) is False
    assert _store().resolve(token) is None


def test_expired_session_is_removed_on_resolve(ctx):
    user = db.session.get(User, ctx['student_id'])
    token = _store().open_session(user)

    user_session = db.session.get(UserSession, token)
    user_session.expires_at = datetime.utcnow() - timedelta(seconds=1)
    db.session.commit()

    assert _store().resolve(token) is None
    assert db.session.get(UserSession, token) is None


def test_purge_expired(ctx):
    user = db.session.get(User, ctx['student_id'])
    live = _store().open_session(user)
    stale = _store().open_session(user)
    db.session.get(UserSession, stale).expires_at = datetime.utcnow() - timedelta(hours=1)
    db.session.commit()

    assert _store().purge_expired() == 1
    assert _store().resolve(live) is not None


def test_corrupt_token_raises_session_error(ctx):
    with pytest.raises(SessionError):
        _store().resolve(12345)
    with pytest.raises(SessionError):
        _store().resolve('x' * 200)
