"""
Route decorators for authentication and authorization.
Provides permission-based access control for API routes.
"""

from functools import wraps
from flask import current_app
from flask_login import login_required, current_user

from utils.api_response import api_exception
from utils.exceptions import AuthorizationError
from utils.permissions import ensure_permission


def permission_required(permission_code: str):
    """
    Decorator to require specific permission for a route.

    Usage:
        @bp.route('/reservations')
        @login_required
        @permission_required('view_reservations')
        def list_reservations():
            ...

    Args:
        permission_code: Permission code required (e.g., 'manage_slots')

    Returns:
        Decorator function
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                ensure_permission(current_user, permission_code)
            except AuthorizationError as e:
                current_app.logger.warning(
                    'Permission %s denied for %s',
                    permission_code, getattr(current_user, 'username', 'anonymous')
                )
                return api_exception(e)
            return func(*args, **kwargs)
        return wrapper
    return decorator


# Re-export login_required for convenience
__all__ = ['login_required', 'permission_required']
