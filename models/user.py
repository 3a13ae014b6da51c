"""
User model and data access functions.
Handles user authentication, CRUD operations, and Flask-Login integration.
"""

import sqlite3

from werkzeug.security import generate_password_hash, check_password_hash

from database import get_db
from models.permission import (
    ROLE_DEFAULT_PERMISSIONS, get_user_permission_codes, set_user_permissions
)
from utils.exceptions import ConflictError, ValidationError
from utils.messages import MESSAGES


ROLES = ('manager', 'staff')

_PUBLIC_COLUMNS = '''
    id, username, email, full_name, role, is_active,
    created_by, created_at, updated_at, last_login
'''


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.username = user_dict['username']
        self.email = user_dict['email']
        self.full_name = user_dict.get('full_name')
        self.role = user_dict['role']
        self.active = user_dict['is_active']
        self.permissions = set(user_dict.get('permissions') or [])
        self.created_at = user_dict.get('created_at')
        self.last_login = user_dict.get('last_login')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.active == 1

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    @property
    def is_manager(self):
        return self.role == 'manager'

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'full_name': self.full_name,
            'role': self.role,
            'is_active': self.is_active,
            'permissions': sorted(self.permissions),
            'last_login': self.last_login,
        }


def _with_permissions(row) -> dict:
    if row is None:
        return None
    user = dict(row)
    user['permissions'] = get_user_permission_codes(user['id'])
    return user


def get_user_by_id(user_id: int) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict (with explicit permission codes) or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute(f'SELECT {_PUBLIC_COLUMNS} FROM users WHERE id = ?', (user_id,))
    return _with_permissions(cursor.fetchone())


def get_user_by_username(username: str, include_hash: bool = False) -> dict:
    """
    Get user by username.

    Args:
        username: Username to search for
        include_hash: Include password_hash (login only)

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    columns = '*' if include_hash else _PUBLIC_COLUMNS
    cursor.execute(f'SELECT {columns} FROM users WHERE username = ?', (username,))
    return _with_permissions(cursor.fetchone())


def get_all_users(active_only: bool = False) -> list:
    """
    Get all users.

    Args:
        active_only: If True, only return active users

    Returns:
        List of user dicts
    """
    db = get_db()
    cursor = db.cursor()

    query = f'SELECT {_PUBLIC_COLUMNS} FROM users'
    if active_only:
        query += ' WHERE is_active = 1'
    query += ' ORDER BY created_at DESC, id DESC'

    cursor.execute(query)
    return [_with_permissions(row) for row in cursor.fetchall()]


def count_users() -> int:
    db = get_db()
    return db.execute('SELECT COUNT(*) FROM users').fetchone()[0]


def count_active_managers(exclude_user_id: int = None) -> int:
    """
    Count active managers, optionally ignoring one user.

    Args:
        exclude_user_id: User to leave out of the count

    Returns:
        Number of active managers
    """
    db = get_db()
    query = "SELECT COUNT(*) FROM users WHERE role = 'manager' AND is_active = 1"
    params = []
    if exclude_user_id is not None:
        query += ' AND id != ?'
        params.append(exclude_user_id)
    return db.execute(query, params).fetchone()[0]


def create_user(username: str, email: str, password: str, full_name: str = None,
                role: str = 'staff', permissions=None, created_by: str = None) -> int:
    """
    Create new user with hashed password.

    Staff without an explicit permission list receive the staff defaults.

    Args:
        username: Unique username
        email: Contact email
        password: Plain text password (will be hashed)
        full_name: User's full name
        role: 'manager' or 'staff'
        permissions: Permission codes for staff accounts
        created_by: Username of the creator

    Returns:
        New user ID

    Raises:
        ValidationError: If the role is unknown
        ConflictError: If the username already exists
    """
    if role not in ROLES:
        raise ValidationError(MESSAGES['unknown_role'].format(choices=', '.join(ROLES)))
    if permissions is None:
        permissions = ROLE_DEFAULT_PERMISSIONS[role]

    db = get_db()
    password_hash = generate_password_hash(password)

    cursor = db.cursor()
    try:
        cursor.execute('''
            INSERT INTO users (username, email, password_hash, full_name, role, created_by)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (username, email, password_hash, full_name, role, created_by))
    except sqlite3.IntegrityError:
        db.rollback()
        raise ConflictError(MESSAGES['username_exists'])

    user_id = cursor.lastrowid
    try:
        set_user_permissions(user_id, permissions, commit=False)
    except ValidationError:
        db.rollback()
        raise

    db.commit()
    return user_id


def update_user(user_id: int, **kwargs) -> bool:
    """
    Update user fields.

    Args:
        user_id: User ID to update
        **kwargs: Fields to update (email, full_name, role, is_active, permissions)

    Returns:
        True if updated successfully
    """
    db = get_db()

    if 'role' in kwargs and kwargs['role'] not in ROLES:
        raise ValidationError(MESSAGES['unknown_role'].format(choices=', '.join(ROLES)))

    # Build dynamic update query
    allowed_fields = ['email', 'full_name', 'role', 'is_active']
    updates = []
    values = []

    for field in allowed_fields:
        if field in kwargs:
            updates.append(f'{field} = ?')
            values.append(kwargs[field])

    if not updates and 'permissions' not in kwargs:
        return False

    cursor = db.cursor()
    if updates:
        updates.append('updated_at = CURRENT_TIMESTAMP')
        values.append(user_id)
        cursor.execute(f'UPDATE users SET {", ".join(updates)} WHERE id = ?', values)
        if cursor.rowcount == 0:
            db.rollback()
            return False

    if 'permissions' in kwargs:
        try:
            set_user_permissions(user_id, kwargs['permissions'], commit=False)
        except ValidationError:
            db.rollback()
            raise

    db.commit()
    return True


def update_password(user_id: int, new_password: str) -> bool:
    """
    Update user password.

    Args:
        user_id: User ID
        new_password: New plain text password (will be hashed)

    Returns:
        True if updated successfully
    """
    db = get_db()
    password_hash = generate_password_hash(new_password)

    cursor = db.cursor()
    cursor.execute('''
        UPDATE users
        SET password_hash = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (password_hash, user_id))

    db.commit()
    return cursor.rowcount > 0


def delete_user(user_id: int) -> bool:
    """
    Delete a user and their permission grants.

    Args:
        user_id: User ID to delete

    Returns:
        True if deleted successfully
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM users WHERE id = ?', (user_id,))
    db.commit()
    return cursor.rowcount > 0


def update_last_login(user_id: int) -> None:
    """
    Update last login timestamp.

    Args:
        user_id: User ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE users SET last_login = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (user_id,))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    """
    Verify password against stored hash.

    Args:
        user_dict: User dictionary with password_hash
        password: Plain text password to check

    Returns:
        True if password matches
    """
    return check_password_hash(user_dict['password_hash'], password)
