"""
Business logic for admin operations.
Provides validation and business rules for user management.
"""

from models.user import ROLES, count_active_managers, get_user_by_id
from utils.messages import MESSAGES
from utils.validators import validate_email, validate_password


def validate_user_creation(username: str, email: str, password: str, role: str = 'staff') -> tuple:
    """
    Validate user creation data.
    Username uniqueness is enforced by create_user (ConflictError).

    Args:
        username: Username to check
        email: Email to check
        password: Password to validate
        role: Requested role

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not username or not email or not password:
        return False, MESSAGES['required_fields'].format(fields='username, email, password')

    if not validate_email(email):
        return False, MESSAGES['invalid_email']

    if role not in ROLES:
        return False, MESSAGES['unknown_role'].format(choices=', '.join(ROLES))

    is_valid, error = validate_password(password)
    if not is_valid:
        return False, error

    return True, ''


def _is_last_active_manager(user: dict) -> bool:
    return (
        user['role'] == 'manager'
        and user['is_active']
        and count_active_managers(exclude_user_id=user['id']) == 0
    )


def can_delete_user(user_id: int, current_user_id: int) -> tuple:
    """
    Check if user can be deleted.

    Args:
        user_id: User ID to delete
        current_user_id: Current logged-in user ID

    Returns:
        Tuple of (can_delete, error_message)
    """
    # Cannot delete self
    if user_id == current_user_id:
        return False, MESSAGES['cannot_delete_self']

    user = get_user_by_id(user_id)
    if not user:
        return False, MESSAGES['user_not_found']

    if _is_last_active_manager(user):
        return False, MESSAGES['cannot_remove_last_manager']

    return True, ''


def can_update_user(user_id: int, changes: dict) -> tuple:
    """
    Check that an update keeps at least one active manager.

    Args:
        user_id: User ID being updated
        changes: Requested field changes (role, is_active, ...)

    Returns:
        Tuple of (can_update, error_message)
    """
    user = get_user_by_id(user_id)
    if not user:
        return False, MESSAGES['user_not_found']

    demoted = 'role' in changes and changes['role'] != 'manager'
    deactivated = 'is_active' in changes and not changes['is_active']
    if (demoted or deactivated) and _is_last_active_manager(user):
        return False, MESSAGES['cannot_remove_last_manager']

    return True, ''
