# File: vocabpractice_app/modules/practice/forms.py
# One small form per wizard step. Emptiness is checked by the wizard itself,
# the forms carry the values and the CSRF token.

from flask_wtf import FlaskForm
from wtforms import HiddenField, StringField, SubmitField, TextAreaField


class TeacherSelectForm(FlaskForm):
    # set by the clicked teacher button
    teacher_id = HiddenField()


class StudentNameForm(FlaskForm):
    student_name = StringField('Full name', render_kw={'placeholder': 'e.g., Sarah Johnson'})
    submit = SubmitField('Continue')


class WordSetSelectForm(FlaskForm):
    word_set_id = HiddenField()


class SentenceForm(FlaskForm):
    sentence = TextAreaField('Your sentence', render_kw={'rows': 4, 'placeholder': 'Write your sentence here...'})
    submit = SubmitField('Next word')


class RestartForm(FlaskForm):
    submit = SubmitField('Done')
