"""
Authentication forms using Flask-WTF.
Forms accept JSON bodies as well as form posts; CSRF is checked either way.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Length, EqualTo, Optional, Regexp


class LoginForm(FlaskForm):
    """Login form with username and password."""

    username = StringField('Username', validators=[
        DataRequired(message='Username is required')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    remember_me = BooleanField('Remember me')


class SetupForm(FlaskForm):
    """First-run form that creates the initial manager account."""

    username = StringField('Username', validators=[
        DataRequired(message='Username is required'),
        Length(min=3, max=50, message='Username must be 3 to 50 characters')
    ])

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Regexp(r'^[^\s@]+@[^\s@]+\.[^\s@]+$', message='Please enter a valid email address')
    ])

    full_name = StringField('Full name', validators=[
        Optional(),
        Length(max=200)
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])


class ChangePasswordForm(FlaskForm):
    """Password change form."""

    current_password = PasswordField('Current password', validators=[
        DataRequired(message='Current password is required')
    ])

    new_password = PasswordField('New password', validators=[
        DataRequired(message='New password is required')
    ])

    confirm_password = PasswordField('Confirm password', validators=[
        DataRequired(message='Please confirm the new password'),
        EqualTo('new_password', message='Passwords do not match')
    ])


def first_form_error(form) -> str:
    """First validation message of a form, for the JSON error envelope."""
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return 'Invalid data'
