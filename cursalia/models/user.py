"""
User model
"""
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime
from cursalia import db


class User(UserMixin, db.Model):
    """User model for authentication"""
    __tablename__ = 'users'

    ROLE_STUDENT = 'student'
    ROLE_TEACHER = 'teacher'
    ROLES = (ROLE_STUDENT, ROLE_TEACHER)

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False, default='')
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_STUDENT)  # 'student' or 'teacher'
    biography = db.Column(db.Text)
    profile_image = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    # Relationships
    links = db.relationship('UserLink', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    courses = db.relationship('Course', backref='creator', lazy='dynamic')

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def is_teacher(self):
        return self.role == self.ROLE_TEACHER

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if password matches hash"""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Public profile fields, never the password hash"""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'role': self.role,
            'biography': self.biography,
            'profile_image': self.profile_image,
            'created_at': self.created_at,
            'last_login': self.last_login
        }

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'


class UserLink(db.Model):
    """Social/profile link shown on a user's profile"""
    __tablename__ = 'user_links'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'link_name', 'link_url', name='uq_user_links_user_name_url'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    link_name = db.Column(db.String(100), nullable=False)
    link_url = db.Column(db.String(500), nullable=False)

    def __repr__(self):
        return f'<UserLink {self.link_name} user={self.user_id}>'
