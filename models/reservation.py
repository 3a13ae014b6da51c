"""
Reservation data access functions.

This module re-exports the reservation functions from the split modules:
- reservation_crud.py: Validation, create, read, delete
- reservation_queries.py: Listing and filtering
- reservation_state.py: Status transitions and attendance
"""

from .reservation_crud import (
    COMMUNICATION_PREFERENCES,
    validate_reservation_draft,
    create_reservation,
    get_reservation,
    delete_reservation,
)

from .reservation_queries import (
    list_reservations,
)

from .reservation_state import (
    STATUSES,
    ATTENDANCE_VALUES,
    VALID_TRANSITIONS,
    get_allowed_transitions,
    set_status,
    set_attendance,
)

__all__ = [
    'COMMUNICATION_PREFERENCES',
    'validate_reservation_draft',
    'create_reservation',
    'get_reservation',
    'delete_reservation',
    'list_reservations',
    'STATUSES',
    'ATTENDANCE_VALUES',
    'VALID_TRANSITIONS',
    'get_allowed_transitions',
    'set_status',
    'set_attendance',
]
