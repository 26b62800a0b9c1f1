"""
Rating model
"""
from datetime import datetime
from cursalia import db


class Rating(db.Model):
    """One rating per user and course"""
    __tablename__ = 'ratings'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'course_id', name='uq_ratings_user_course'),
        db.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_ratings_range'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    user = db.relationship('User', backref=db.backref('ratings', lazy='dynamic'))

    def __repr__(self):
        return f'<Rating user={self.user_id} course={self.course_id} rating={self.rating}>'
