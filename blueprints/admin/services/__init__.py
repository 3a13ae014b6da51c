"""Admin services package."""

from blueprints.admin.services.user_service import (  # noqa: F401
    validate_user_creation,
    can_delete_user,
    can_update_user,
)
