"""
Teacher forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, IntegerField, SubmitField
from wtforms.validators import DataRequired, Length, Optional, URL


class CourseForm(FlaskForm):
    """Form for creating or editing a course.

    Requirements and sections are repeated inputs (``requirements``,
    ``section_title`` and ``video_url``) read straight from the request.
    """
    name = StringField('Nombre del curso', validators=[
        DataRequired(message='El nombre del curso es obligatorio'),
        Length(max=200)
    ])
    description = TextAreaField('Descripción', validators=[Optional()])
    language = StringField('Idioma', validators=[Optional(), Length(max=50)],
                           render_kw={"placeholder": "Ej: Español, Inglés"})
    cover_image = StringField('Imagen de portada (URL)', validators=[
        Optional(),
        URL(message='Debe ser una URL válida')
    ])
    category = IntegerField('Categoría', validators=[Optional()])
    submit = SubmitField('Guardar curso')

    def course_fields(self):
        return {
            'name': self.name.data,
            'description': self.description.data,
            'language': self.language.data,
            'cover_image': self.cover_image.data
        }
