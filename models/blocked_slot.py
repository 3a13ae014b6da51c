"""
Blocked time slot model and data access functions.
Handles blocking exact (date, time) pairs against new reservations.
"""

import sqlite3
import uuid

from database import get_db
from utils.datetime_helpers import is_slot_in_past, now_iso
from utils.exceptions import ConflictError, ValidationError
from utils.messages import MESSAGES
from utils.validators import validate_date_format, validate_time_format


def _with_is_past(row) -> dict:
    slot = dict(row)
    slot['is_past'] = is_slot_in_past(slot['slot_date'], slot['slot_time'])
    return slot


# =============================================================================
# QUERIES
# =============================================================================

def is_blocked(slot_date: str, slot_time: str) -> bool:
    """
    Check whether an exact (date, time) pair is blocked.

    No overlap matching: a block at 19:00 does not block 19:01.

    Args:
        slot_date: Date (YYYY-MM-DD)
        slot_time: Time (HH:MM)

    Returns:
        True if a block exists for that pair
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT 1 FROM blocked_slots
        WHERE slot_date = ? AND slot_time = ?
    ''', (slot_date, slot_time))
    return cursor.fetchone() is not None


def get_slot_by_id(slot_id: str) -> dict:
    """
    Get blocked slot by ID.

    Returns:
        Slot dict with derived is_past, or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM blocked_slots WHERE id = ?', (slot_id,))
    row = cursor.fetchone()
    return _with_is_past(row) if row else None


def get_blocked_slots(slot_date: str = None, include_past: bool = True) -> list:
    """
    Get blocked slots ordered by date and time.

    Past slots are kept in storage; they are only flagged with is_past.

    Args:
        slot_date: Optional date filter (YYYY-MM-DD)
        include_past: If False, drop slots already in the past

    Returns:
        List of slot dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = 'SELECT * FROM blocked_slots'
    params = []
    if slot_date:
        query += ' WHERE slot_date = ?'
        params.append(slot_date)
    query += ' ORDER BY slot_date, slot_time'

    cursor.execute(query, params)
    slots = [_with_is_past(row) for row in cursor.fetchall()]
    if not include_past:
        slots = [slot for slot in slots if not slot['is_past']]
    return slots


# =============================================================================
# MUTATIONS
# =============================================================================

def block_slot(slot_date: str, slot_time: str, reason: str, blocked_by: str) -> dict:
    """
    Block a time slot for new reservations.

    Args:
        slot_date: Date (YYYY-MM-DD)
        slot_time: Time (HH:MM)
        reason: Free-text reason shown to staff
        blocked_by: Username creating the block

    Returns:
        Created slot dict

    Raises:
        ValidationError: Malformed date/time or slot already in the past
        ConflictError: Slot is already blocked
    """
    if not validate_date_format(slot_date):
        raise ValidationError(MESSAGES['invalid_date'])
    if not validate_time_format(slot_time):
        raise ValidationError(MESSAGES['invalid_time'])
    if is_slot_in_past(slot_date, slot_time):
        raise ValidationError(MESSAGES['slot_in_past'])
    if is_blocked(slot_date, slot_time):
        raise ConflictError(MESSAGES['slot_already_blocked'])

    slot_id = uuid.uuid4().hex
    db = get_db()
    try:
        db.execute('''
            INSERT INTO blocked_slots (id, slot_date, slot_time, reason, blocked_by, blocked_at)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (slot_id, slot_date, slot_time, (reason or '').strip() or None, blocked_by, now_iso()))
        db.commit()
    except sqlite3.IntegrityError:
        # Lost a race against another block for the same pair
        db.rollback()
        raise ConflictError(MESSAGES['slot_already_blocked'])

    return get_slot_by_id(slot_id)


def unblock_slot(slot_id: str) -> bool:
    """
    Remove a blocked slot.

    Args:
        slot_id: Slot ID

    Returns:
        True if a slot was removed
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM blocked_slots WHERE id = ?', (slot_id,))
    db.commit()
    return cursor.rowcount > 0
