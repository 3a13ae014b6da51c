"""
Admin routes for users, permissions, notification providers and the delivery log.
"""

from flask import Blueprint, current_app, request
from flask_login import login_required, current_user

from utils.api_response import api_success, api_error, request_json
from utils.decorators import permission_required
from utils.exceptions import NotFoundError
from utils.messages import MESSAGES
from utils.validators import validate_email
from models.user import get_all_users, get_user_by_id, create_user, update_user, delete_user
from models.permission import get_all_permissions, ROLE_DEFAULT_PERMISSIONS
from models.provider_config import (
    get_all_provider_configs, save_provider_config, delete_provider_config
)
from models.delivery_log import get_delivery_log
from notifications.dispatcher import send_test_message
from notifications.registry import describe_providers
from blueprints.admin.services import validate_user_creation, can_delete_user, can_update_user

admin_bp = Blueprint('admin', __name__)


# =============================================================================
# USERS
# =============================================================================

@admin_bp.route('/users')
@login_required
@permission_required('manage_users')
def users():
    """List all users with optional role/active filters."""
    role_filter = request.args.get('role', '')
    active_filter = request.args.get('active', '')

    all_users = get_all_users(active_only=False)

    if role_filter:
        all_users = [u for u in all_users if u['role'] == role_filter]

    if active_filter:
        is_active = active_filter == '1'
        all_users = [u for u in all_users if bool(u['is_active']) == is_active]

    return api_success(data=all_users)


@admin_bp.route('/users', methods=['POST'])
@login_required
@permission_required('manage_users')
def users_create():
    """
    Create new user.

    Request body:
        username, email, password, full_name (optional),
        role ('manager' | 'staff'), permissions (optional list of codes)
    """
    data = request_json()

    username = str(data.get('username') or '').strip()
    email = str(data.get('email') or '').strip()
    password = data.get('password') or ''
    full_name = str(data.get('full_name') or '').strip()
    role = data.get('role') or 'staff'

    is_valid, error_msg = validate_user_creation(username, email, password, role)
    if not is_valid:
        return api_error(error_msg)

    user_id = create_user(
        username=username,
        email=email,
        password=password,
        full_name=full_name if full_name else None,
        role=role,
        permissions=data.get('permissions'),
        created_by=current_user.username
    )

    current_app.logger.info('User %s created by %s', username, current_user.username)
    return api_success(data=get_user_by_id(user_id), message=MESSAGES['user_created'], status=201)


@admin_bp.route('/users/<int:user_id>', methods=['PUT'])
@login_required
@permission_required('manage_users')
def users_edit(user_id):
    """
    Edit existing user.

    Request body (all optional):
        email, full_name, role, is_active, permissions
    """
    data = request_json()

    changes = {}
    for field in ('email', 'full_name', 'role', 'permissions'):
        if field in data:
            changes[field] = data[field]
    if 'is_active' in data:
        changes['is_active'] = 1 if data['is_active'] else 0

    if 'email' in changes:
        changes['email'] = str(changes['email'] or '').strip()
        if not validate_email(changes['email']):
            return api_error(MESSAGES['invalid_email'])
    if 'full_name' in changes:
        changes['full_name'] = str(changes['full_name'] or '').strip() or None

    can_update, error_msg = can_update_user(user_id, changes)
    if not can_update:
        status = 404 if error_msg == MESSAGES['user_not_found'] else 400
        return api_error(error_msg, status=status)

    if changes:
        update_user(user_id, **changes)
    return api_success(data=get_user_by_id(user_id), message=MESSAGES['user_updated'])


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@login_required
@permission_required('manage_users')
def users_delete(user_id):
    """Delete user."""
    can_delete, error_msg = can_delete_user(user_id, current_user.id)
    if not can_delete:
        status = 404 if error_msg == MESSAGES['user_not_found'] else 400
        return api_error(error_msg, status=status)

    delete_user(user_id)
    current_app.logger.info('User %s deleted by %s', user_id, current_user.username)
    return api_success(message=MESSAGES['user_deleted'])


@admin_bp.route('/permissions')
@login_required
@permission_required('manage_users')
def permissions():
    """Permission catalog and role defaults."""
    return api_success(data={
        'permissions': get_all_permissions(),
        'role_defaults': ROLE_DEFAULT_PERMISSIONS,
    })


# =============================================================================
# NOTIFICATION PROVIDERS
# =============================================================================

@admin_bp.route('/providers')
@login_required
@permission_required('system_admin')
def providers():
    """Provider registry plus stored configurations (secrets masked)."""
    return api_success(data={
        'available': describe_providers(),
        'configured': get_all_provider_configs(masked=True),
    })


@admin_bp.route('/providers/<provider>', methods=['PUT'])
@login_required
@permission_required('system_admin')
def providers_save(provider):
    """
    Save a provider configuration.

    Request body:
        settings: Provider fields (see GET /admin/providers)
        is_active: Serve the provider's channel (default true)
    """
    data = request_json()

    config = save_provider_config(
        provider,
        data.get('settings') or {},
        updated_by=current_user.username,
        is_active=bool(data.get('is_active', True))
    )
    current_app.logger.info('Provider %s saved by %s', provider, current_user.username)
    return api_success(data=config, message=MESSAGES['provider_saved'])


@admin_bp.route('/providers/<provider>', methods=['DELETE'])
@login_required
@permission_required('system_admin')
def providers_delete(provider):
    """Remove a provider configuration."""
    if not delete_provider_config(provider):
        raise NotFoundError(MESSAGES['unknown_provider'].format(provider=provider))
    return api_success(message=MESSAGES['provider_deleted'])


@admin_bp.route('/providers/<provider>/test', methods=['POST'])
@login_required
@permission_required('system_admin')
def providers_test(provider):
    """
    Send a test message through a stored provider configuration.

    Request body:
        recipient: Email address or phone number
        channel: email, sms or whatsapp (manual provider only)

    The attempt is written to the delivery log with kind 'test'.
    """
    data = request_json()

    outcome = send_test_message(provider, data.get('recipient'), data.get('channel'))
    current_app.logger.info('Provider %s tested by %s: %s',
                            provider, current_user.username, outcome['status'])

    if outcome['status'] in ('sent', 'composed'):
        return api_success(data=outcome, message=MESSAGES['provider_test_sent'].format(provider=provider))
    return api_success(
        data=outcome,
        warning=MESSAGES['provider_test_failed'].format(error=outcome['error'])
    )


# =============================================================================
# DELIVERY LOG
# =============================================================================

@admin_bp.route('/delivery-log')
@login_required
@permission_required('view_all_data')
def delivery_log():
    """Notification attempts, newest first. Filters: reservation_id, status, limit."""
    limit = request.args.get('limit', 100, type=int)
    entries = get_delivery_log(
        reservation_id=request.args.get('reservation_id') or None,
        status=request.args.get('status') or None,
        limit=max(1, min(limit, 500))
    )
    return api_success(data=entries)
