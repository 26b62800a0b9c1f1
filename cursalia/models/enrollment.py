"""
Enrollment and course progress models
"""
from datetime import datetime
from cursalia import db


class Enrollment(db.Model):
    """A learner joined to a course"""
    __tablename__ = 'enrollments'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'course_id', name='uq_enrollments_user_course'),
    )

    STATUS_ENROLLED = 'enrolled'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    enrollment_date = db.Column(db.DateTime, default=datetime.utcnow)
    progress = db.Column(db.Integer, nullable=False, default=0)  # 0-100, mirrors course_progress
    status = db.Column(db.String(20), nullable=False, default=STATUS_ENROLLED)

    course = db.relationship('Course')

    def __repr__(self):
        return f'<Enrollment user={self.user_id} course={self.course_id} progress={self.progress}>'


class CourseProgress(db.Model):
    """Completion percentage and last viewed section of a learner in a course"""
    __tablename__ = 'course_progress'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'course_id', name='uq_course_progress_user_course'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    progress = db.Column(db.Integer, nullable=False, default=0)
    last_viewed_section = db.Column(db.Integer, db.ForeignKey('sections.id', ondelete='SET NULL'), nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<CourseProgress user={self.user_id} course={self.course_id} progress={self.progress}>'
