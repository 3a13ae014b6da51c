"""
Reservation state management functions.
Handles status transitions and attendance marking.

Lifecycle:
    pending --confirm--> confirmed --decline--> declined
    pending --decline--> declined

Declined is terminal. A confirmed reservation with recorded attendance is
terminal too; attendance itself has no unmark path.
"""

from database import get_db
from utils.datetime_helpers import now_iso
from utils.events import emit, reservation_status_changed
from utils.exceptions import ConflictError, InvalidStateTransitionError, ValidationError
from utils.messages import MESSAGES
from .reservation_crud import get_reservation


# =============================================================================
# CONSTANTS
# =============================================================================

STATUSES = ('pending', 'confirmed', 'declined')

ATTENDANCE_VALUES = ('attended', 'no-show')

VALID_TRANSITIONS = {
    'pending': ['confirmed', 'declined'],
    'confirmed': ['declined'],
    'declined': [],
}


def get_allowed_transitions(status: str, attendance: str = None) -> list:
    """
    Get the statuses a reservation may move to.

    Args:
        status: Current status
        attendance: Recorded attendance, if any

    Returns:
        List of target statuses (empty when terminal)
    """
    if attendance:
        return []
    return list(VALID_TRANSITIONS.get(status, []))


# =============================================================================
# STATE TRANSITIONS
# =============================================================================

def set_status(reservation_id: str, new_status: str, changed_by: str = None) -> dict:
    """
    Move a reservation to a new status.

    Behavior:
    1. Unknown reservation: returns None, nothing written
    2. Same status: returns the reservation unchanged, no event
    3. Forbidden change: raises InvalidStateTransitionError
    4. Writes only if the status is still the one read (compare-and-set)
    5. After commit, emits reservation-status-changed

    Args:
        reservation_id: Reservation ID
        new_status: Target status
        changed_by: Username making the change

    Returns:
        Updated reservation dict, or None if not found

    Raises:
        ValidationError: Unknown status value
        InvalidStateTransitionError: Transition not allowed
        ConflictError: Another writer changed the status first
    """
    if new_status not in STATUSES:
        raise ValidationError(MESSAGES['invalid_status'].format(choices=', '.join(STATUSES)))

    reservation = get_reservation(reservation_id)
    if reservation is None:
        return None

    current = reservation['status']
    if current == new_status:
        return reservation

    if reservation['attendance']:
        raise InvalidStateTransitionError(MESSAGES['attendance_is_final'])

    allowed = get_allowed_transitions(current)
    if new_status not in allowed:
        raise InvalidStateTransitionError(MESSAGES['invalid_transition'].format(
            current=current,
            requested=new_status,
            allowed=', '.join(allowed) or 'none'
        ))

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE reservations
        SET status = ?, updated_at = ?
        WHERE id = ? AND status = ? AND attendance IS NULL
    ''', (new_status, now_iso(), reservation_id, current))

    if cursor.rowcount == 0:
        db.rollback()
        raise ConflictError(MESSAGES['concurrent_update'])

    db.commit()

    updated = get_reservation(reservation_id)
    emit(
        reservation_status_changed,
        reservation=updated,
        previous_status=current,
        changed_by=changed_by
    )
    return updated


def set_attendance(reservation_id: str, attendance: str, marked_by: str) -> dict:
    """
    Record whether a confirmed reservation was honoured.

    Attendance may be recorded before the reservation time; the slot does
    not need to be in the past.

    Args:
        reservation_id: Reservation ID
        attendance: 'attended' or 'no-show'
        marked_by: Username recording attendance

    Returns:
        Updated reservation dict, or None if not found

    Raises:
        ValidationError: Unknown attendance value
        InvalidStateTransitionError: Not confirmed, or already recorded
        ConflictError: Another writer changed the reservation first
    """
    if attendance not in ATTENDANCE_VALUES:
        raise ValidationError(
            MESSAGES['invalid_attendance'].format(choices=', '.join(ATTENDANCE_VALUES))
        )

    reservation = get_reservation(reservation_id)
    if reservation is None:
        return None

    if reservation['status'] != 'confirmed':
        raise InvalidStateTransitionError(MESSAGES['attendance_requires_confirmed'])
    if reservation['attendance']:
        raise InvalidStateTransitionError(MESSAGES['attendance_already_marked'])

    marked_at = now_iso()
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE reservations
        SET attendance = ?,
            attendance_marked_at = ?,
            attendance_marked_by = ?,
            updated_at = ?
        WHERE id = ? AND status = 'confirmed' AND attendance IS NULL
    ''', (attendance, marked_at, marked_by, marked_at, reservation_id))

    if cursor.rowcount == 0:
        db.rollback()
        raise ConflictError(MESSAGES['concurrent_update'])

    db.commit()
    return get_reservation(reservation_id)
