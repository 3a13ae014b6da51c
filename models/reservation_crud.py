"""
Reservation CRUD operations.
Handles create, read and delete for reservations.
"""

import uuid

from database import get_db
from utils.datetime_helpers import get_today, now_iso
from utils.events import emit, reservation_created
from utils.exceptions import ConflictError, ValidationError
from utils.messages import MESSAGES
from utils.validators import (
    sanitize_input, validate_date_format, validate_email,
    validate_phone, validate_time_format
)
from .blocked_slot import is_blocked


REQUIRED_FIELDS = ('customer_name', 'email', 'phone', 'date', 'time')

COMMUNICATION_PREFERENCES = ('email', 'sms', 'whatsapp')

DEFAULT_PARTY_SIZE = 2

MAX_PARTY_SIZE = 100

SPECIAL_REQUESTS_MAX_LENGTH = 500


# =============================================================================
# VALIDATION
# =============================================================================

def _parse_party_size(value) -> int:
    if value is None or value == '':
        return DEFAULT_PARTY_SIZE
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_PARTY_SIZE:
        raise ValidationError(MESSAGES['invalid_party_size'].format(maximum=MAX_PARTY_SIZE))
    return value


def validate_reservation_draft(draft: dict) -> dict:
    """
    Validate and normalise a reservation submission.

    Checks run in a fixed order and the first failure is raised, so no
    partial record is ever written.

    Args:
        draft: Submitted fields (customer_name, email, phone, date, time,
               party_size, special_requests, communication_preference)

    Returns:
        Normalised field dict ready for insert

    Raises:
        ValidationError: Not an object, missing or malformed field, or date before today
        ConflictError: The (date, time) slot is blocked
    """
    if draft is None:
        draft = {}
    if not isinstance(draft, dict):
        raise ValidationError(MESSAGES['body_must_be_object'])

    values = {
        field: str(draft.get(field) or '').strip()
        for field in REQUIRED_FIELDS
    }

    missing = [field for field in REQUIRED_FIELDS if not values[field]]
    if missing:
        raise ValidationError(MESSAGES['required_fields'].format(fields=', '.join(missing)))

    if not validate_date_format(values['date']):
        raise ValidationError(MESSAGES['invalid_date'])
    if not validate_time_format(values['time']):
        raise ValidationError(MESSAGES['invalid_time'])
    if not validate_email(values['email']):
        raise ValidationError(MESSAGES['invalid_email'])
    if not validate_phone(values['phone']):
        raise ValidationError(MESSAGES['invalid_phone'])

    party_size = _parse_party_size(draft.get('party_size'))

    preference = draft.get('communication_preference') or 'email'
    if preference not in COMMUNICATION_PREFERENCES:
        raise ValidationError(MESSAGES['invalid_preference'].format(
            choices=', '.join(COMMUNICATION_PREFERENCES)
        ))

    if values['date'] < get_today().isoformat():
        raise ValidationError(MESSAGES['date_in_past'])

    if is_blocked(values['date'], values['time']):
        raise ConflictError(MESSAGES['slot_unavailable'])

    return {
        'customer_name': values['customer_name'],
        'email': values['email'],
        'phone': values['phone'],
        'reservation_date': values['date'],
        'reservation_time': values['time'],
        'party_size': party_size,
        'special_requests': sanitize_input(
            str(draft.get('special_requests') or ''), SPECIAL_REQUESTS_MAX_LENGTH
        ) or None,
        'communication_preference': preference,
    }


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(draft: dict) -> dict:
    """
    Create a pending reservation from a customer submission.

    After commit, emits reservation-created. Subscriber failures never
    undo the insert.

    Args:
        draft: Submitted fields, see validate_reservation_draft

    Returns:
        Created reservation dict
    """
    fields = validate_reservation_draft(draft)
    reservation_id = uuid.uuid4().hex

    db = get_db()
    db.execute('''
        INSERT INTO reservations (
            id, customer_name, email, phone, reservation_date, reservation_time,
            party_size, special_requests, status, communication_preference, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, 'pending', ?, ?)
    ''', (
        reservation_id,
        fields['customer_name'],
        fields['email'],
        fields['phone'],
        fields['reservation_date'],
        fields['reservation_time'],
        fields['party_size'],
        fields['special_requests'],
        fields['communication_preference'],
        now_iso(),
    ))
    db.commit()

    reservation = get_reservation(reservation_id)
    emit(reservation_created, reservation=reservation)
    return reservation


# =============================================================================
# READ
# =============================================================================

def get_reservation(reservation_id: str) -> dict:
    """
    Get reservation by ID.

    Args:
        reservation_id: Reservation ID

    Returns:
        Reservation dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM reservations WHERE id = ?', (reservation_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


# =============================================================================
# DELETE
# =============================================================================

def delete_reservation(reservation_id: str) -> bool:
    """
    Delete a reservation.

    Delivery log entries keep their reservation_id for audit.

    Args:
        reservation_id: Reservation ID

    Returns:
        True if a reservation was deleted
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))
    db.commit()
    return cursor.rowcount > 0
