"""
Permission checking utilities.
Provides the permission gate used by route decorators and services.
"""

from models.permission import PERMISSION_CODES, get_user_permission_codes
from utils.exceptions import AuthorizationError
from utils.messages import MESSAGES


def _user_field(user, name):
    if isinstance(user, dict):
        return user.get(name)
    return getattr(user, name, None)


def load_user_permissions(user) -> set:
    """
    Resolve the effective permission set for a user.

    Managers implicitly hold the whole catalog regardless of stored grants.

    Args:
        user: User object (Flask-Login) or user dict

    Returns:
        Set of permission codes
    """
    if _user_field(user, 'role') == 'manager':
        return set(PERMISSION_CODES)

    stored = _user_field(user, 'permissions')
    if stored is None:
        stored = get_user_permission_codes(_user_field(user, 'id'))
    return set(stored) & PERMISSION_CODES


def has_permission(user, permission_code: str) -> bool:
    """
    Check if user has a specific permission.

    Args:
        user: User object (Flask-Login) or user dict
        permission_code: Permission code to check

    Returns:
        True if user has permission
    """
    if user is None:
        return False
    if _user_field(user, 'role') == 'manager':
        return True
    return permission_code in load_user_permissions(user)


def ensure_permission(user, permission_code: str) -> None:
    """
    Raise unless the user holds the permission.

    Raises:
        AuthorizationError: If the permission is missing
    """
    if not has_permission(user, permission_code):
        raise AuthorizationError(MESSAGES['permission_denied'])
