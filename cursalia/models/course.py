"""
Course catalog models
"""
from datetime import datetime
from cursalia import db


class Course(db.Model):
    """Course created and owned by a teacher"""
    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    creator_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    language = db.Column(db.String(50))
    cover_image = db.Column(db.String(500))  # URL, uploads are not handled here
    creation_date = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    category_link = db.relationship('CourseCategory', uselist=False, lazy='joined')
    requirements = db.relationship('Requirement', order_by='Requirement.position', lazy='select')
    sections = db.relationship('Section', order_by='Section.position', lazy='select')

    @property
    def category(self):
        return self.category_link.category if self.category_link else None

    @property
    def category_name(self):
        category = self.category
        return category.name if category else None

    def __repr__(self):
        return f'<Course {self.name}>'


class Category(db.Model):
    """Course category"""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, unique=True)

    def __repr__(self):
        return f'<Category {self.name}>'


class CourseCategory(db.Model):
    """Link between a course and its category (one per course)"""
    __tablename__ = 'course_categories'

    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False)

    category = db.relationship('Category', lazy='joined')

    def __repr__(self):
        return f'<CourseCategory course={self.course_id} category={self.category_id}>'


class Requirement(db.Model):
    """Skill a learner should have before taking the course"""
    __tablename__ = 'requirements'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    requirement_text = db.Column(db.String(500), nullable=False)

    def __repr__(self):
        return f'<Requirement course={self.course_id} {self.requirement_text!r}>'


class Section(db.Model):
    """Video section of a course"""
    __tablename__ = 'sections'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    title = db.Column(db.String(200), nullable=False)
    video_url = db.Column(db.String(500), nullable=False)

    def __repr__(self):
        return f'<Section {self.title} course={self.course_id}>'
