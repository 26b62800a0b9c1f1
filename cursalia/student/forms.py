"""
Student forms
"""
from flask_wtf import FlaskForm
from wtforms import IntegerField, TextAreaField, SubmitField
from wtforms.validators import DataRequired, NumberRange, Optional, Length


class RatingForm(FlaskForm):
    """Form for rating a course from the course player"""
    course_id = IntegerField('Curso', validators=[DataRequired()])
    user_id = IntegerField('Usuario', validators=[Optional()])
    rating = IntegerField('Valoración', validators=[
        DataRequired(message='La valoración es obligatoria'),
        NumberRange(min=1, max=5, message='La valoración debe estar entre 1 y 5')
    ])
    comment = TextAreaField('Comentario', validators=[Optional(), Length(max=2000)])
    submit = SubmitField('Enviar valoración')
