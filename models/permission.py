"""
Permission catalog and data access functions.
Handles the closed permission catalog and per-user grants.
"""

from database import get_db
from utils.exceptions import ValidationError
from utils.messages import MESSAGES


# =============================================================================
# CATALOG
# =============================================================================

PERMISSION_CATALOG = [
    ('view_reservations', 'View Reservations', 'Can view all reservations in the system'),
    ('manage_reservations', 'Manage Reservations', 'Can accept, decline, and modify reservations'),
    ('mark_attendance', 'Mark Attendance', 'Can mark customers as attended or no-show'),
    ('view_analytics', 'View Analytics', 'Can access analytics and reports dashboard'),
    ('manage_users', 'Manage Users', 'Can create, edit, and delete user accounts'),
    ('manage_slots', 'Manage Time Slots', 'Can block and unblock time slots'),
    ('system_admin', 'System Administration', 'Full system access and configuration'),
    ('export_data', 'Export Data', 'Can export reservation data'),
    ('view_all_data', 'View All Data', 'Can view delivery logs and all stored records'),
]

PERMISSION_CODES = frozenset(code for code, _, _ in PERMISSION_CATALOG)

ROLE_DEFAULT_PERMISSIONS = {
    'manager': [code for code, _, _ in PERMISSION_CATALOG],
    'staff': ['view_reservations', 'manage_reservations', 'mark_attendance'],
}


def validate_permission_codes(codes) -> list:
    """
    Check codes against the catalog.

    Returns:
        Deduplicated list of codes in catalog order

    Raises:
        ValidationError: If any code is not in the catalog
    """
    codes = set(codes or [])
    unknown = sorted(codes - PERMISSION_CODES)
    if unknown:
        raise ValidationError(MESSAGES['unknown_permissions'].format(codes=', '.join(unknown)))
    return [code for code, _, _ in PERMISSION_CATALOG if code in codes]


# =============================================================================
# QUERIES
# =============================================================================

def get_all_permissions() -> list:
    """
    Get the permission catalog as stored.

    Returns:
        List of permission dicts ordered for display
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT code, name, description FROM permissions ORDER BY display_order')
    return [dict(row) for row in cursor.fetchall()]


def get_user_permission_codes(user_id: int) -> list:
    """
    Get the permission codes explicitly granted to a user.

    Args:
        user_id: User ID

    Returns:
        List of permission codes in catalog order
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT p.code
        FROM permissions p
        JOIN user_permissions up ON p.id = up.permission_id
        WHERE up.user_id = ?
        ORDER BY p.display_order
    ''', (user_id,))
    return [row['code'] for row in cursor.fetchall()]


def set_user_permissions(user_id: int, codes, commit: bool = True) -> None:
    """
    Replace a user's explicit permission grants.

    Args:
        user_id: User ID
        codes: Iterable of catalog permission codes
        commit: Commit immediately (False when part of a larger write)
    """
    codes = validate_permission_codes(codes)
    db = get_db()
    db.execute('DELETE FROM user_permissions WHERE user_id = ?', (user_id,))
    if codes:
        placeholders = ','.join('?' * len(codes))
        db.execute(f'''
            INSERT INTO user_permissions (user_id, permission_id)
            SELECT ?, id FROM permissions WHERE code IN ({placeholders})
        ''', [user_id] + codes)
    if commit:
        db.commit()
