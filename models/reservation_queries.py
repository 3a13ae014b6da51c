"""
Reservation query functions.
Listing and filtering.
"""

from database import get_db


ORDERINGS = {
    'created': 'created_at DESC, rowid DESC',
    'schedule': 'reservation_date DESC, reservation_time DESC',
}


def list_reservations(status: str = None, reservation_date: str = None,
                      order_by: str = 'created') -> list:
    """
    List reservations with optional filters.

    Args:
        status: Filter by status
        reservation_date: Filter by date (YYYY-MM-DD)
        order_by: 'created' (newest first) or 'schedule' (latest slot first)

    Returns:
        List of reservation dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = 'SELECT * FROM reservations WHERE 1=1'
    params = []

    if status:
        query += ' AND status = ?'
        params.append(status)

    if reservation_date:
        query += ' AND reservation_date = ?'
        params.append(reservation_date)

    query += f" ORDER BY {ORDERINGS.get(order_by, ORDERINGS['created'])}"

    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]
