"""
Authentication routes: first-run setup, login, logout, session info.
"""

from flask import Blueprint, current_app
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm, SetupForm, ChangePasswordForm, first_form_error
from models.user import (
    User, count_users, create_user, get_user_by_id, get_user_by_username,
    update_last_login, update_password, check_password
)
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES
from utils.permissions import load_user_permissions
from utils.validators import validate_password

auth_bp = Blueprint('auth', __name__)


def _session_payload(user: User) -> dict:
    payload = user.to_dict()
    payload['permissions'] = sorted(load_user_permissions(user))
    return payload


@auth_bp.route('/csrf-token')
def csrf_token():
    """Issue a CSRF token for the external UI (send back as X-CSRFToken)."""
    return api_success(data={'csrf_token': generate_csrf()})


@auth_bp.route('/setup', methods=['POST'])
def setup():
    """
    Create the first manager account.
    Only available while no user exists; no default credentials are shipped.
    """
    if count_users() > 0:
        return api_error(MESSAGES['setup_already_done'], status=409)

    form = SetupForm()
    if not form.validate_on_submit():
        return api_error(first_form_error(form))

    is_valid, error = validate_password(form.password.data)
    if not is_valid:
        return api_error(error)

    user_id = create_user(
        username=form.username.data.strip(),
        email=form.email.data.strip(),
        password=form.password.data,
        full_name=(form.full_name.data or '').strip() or None,
        role='manager',
        created_by='setup'
    )

    current_app.logger.info('Initial manager %s created', form.username.data)
    return api_success(data=get_user_by_id(user_id), message=MESSAGES['setup_complete'], status=201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate with username and password."""
    form = LoginForm()
    if not form.validate_on_submit():
        return api_error(first_form_error(form))

    # Get user by username
    user_dict = get_user_by_username(form.username.data, include_hash=True)

    # Check credentials
    if user_dict is None or not check_password(user_dict, form.password.data):
        current_app.logger.warning('Failed login for %s', form.username.data)
        return api_error(MESSAGES['invalid_credentials'], status=401)

    # Check if user is active
    if not user_dict['is_active']:
        return api_error(MESSAGES['account_disabled'], status=403)

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)
    update_last_login(user.id)

    return api_success(
        data=_session_payload(user),
        message=MESSAGES['login_success'].format(name=user.full_name or user.username)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me')
@login_required
def me():
    """Current user with effective permissions."""
    return api_success(data=_session_payload(current_user))


@auth_bp.route('/change-password', methods=['POST'])
@login_required
def change_password():
    """Change the current user's password."""
    form = ChangePasswordForm()
    if not form.validate_on_submit():
        return api_error(first_form_error(form))

    user_dict = get_user_by_username(current_user.username, include_hash=True)
    if not check_password(user_dict, form.current_password.data):
        return api_error(MESSAGES['invalid_credentials'], status=401)

    is_valid, error = validate_password(form.new_password.data)
    if not is_valid:
        return api_error(error)

    update_password(current_user.id, form.new_password.data)
    return api_success(message=MESSAGES['password_updated'])
