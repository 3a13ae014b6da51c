"""
Delivery log data access functions.
Append-only record of every notification attempt.
"""

from database import get_db
from utils.datetime_helpers import now_iso


def record_delivery(outcome, reservation_id: str = None) -> int:
    """
    Append a delivery attempt.

    Args:
        outcome: DeliveryOutcome from the dispatcher
        reservation_id: Reservation the notification was about

    Returns:
        New log entry ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO delivery_log (
            reservation_id, kind, channel, provider, recipient,
            subject, message, status, error, compose_url, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ''', (
        reservation_id,
        outcome.kind,
        outcome.channel,
        outcome.provider,
        outcome.recipient,
        outcome.subject,
        outcome.message,
        outcome.status,
        outcome.error,
        outcome.compose_url,
        now_iso(),
    ))
    db.commit()
    return cursor.lastrowid


def get_delivery_log(reservation_id: str = None, status: str = None, limit: int = 100) -> list:
    """
    Get delivery log entries, newest first.

    Args:
        reservation_id: Filter by reservation
        status: Filter by outcome status
        limit: Maximum entries to return

    Returns:
        List of log entry dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = 'SELECT * FROM delivery_log WHERE 1=1'
    params = []

    if reservation_id:
        query += ' AND reservation_id = ?'
        params.append(reservation_id)

    if status:
        query += ' AND status = ?'
        params.append(status)

    query += ' ORDER BY id DESC LIMIT ?'
    params.append(limit)

    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]
