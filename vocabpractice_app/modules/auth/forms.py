# File: vocabpractice_app/modules/auth/forms.py
# Sign-in and registration forms for teacher accounts.

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SubmitField
from wtforms.validators import DataRequired, EqualTo, Length


class LoginForm(FlaskForm):
    """Teacher sign-in form."""
    email = StringField('Email', validators=[DataRequired(message="Please enter your email.")])
    password = PasswordField('Password', validators=[DataRequired(message="Please enter your password.")])
    remember_me = BooleanField('Remember me')
    submit = SubmitField('Sign in')


class RegistrationForm(FlaskForm):
    """Teacher registration form."""
    full_name = StringField('Full name', validators=[DataRequired(message="Please enter your name."), Length(max=120)])
    email = StringField('Email', validators=[DataRequired(message="Please enter your email."), Length(max=120)])
    password = PasswordField('Password', validators=[DataRequired(message="Please enter a password.")])
    password2 = PasswordField(
        'Repeat password',
        validators=[DataRequired(message="Please confirm your password."), EqualTo('password', message='Passwords do not match.')]
    )
    submit = SubmitField('Create account')


class LogoutForm(FlaskForm):
    """Carries the CSRF token for the sign-out button in the header."""
    submit = SubmitField('Sign out')
