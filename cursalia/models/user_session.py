"""
Server-side session model
"""
from datetime import datetime
from cursalia import db


class UserSession(db.Model):
    """Login session addressed by an opaque token kept in the session cookie"""
    __tablename__ = 'user_sessions'

    token = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    user = db.relationship('User')

    def is_expired(self, now=None):
        return (now or datetime.utcnow()) >= self.expires_at

    def __repr__(self):
        return f'<UserSession user={self.user_id} expires={self.expires_at}>'
