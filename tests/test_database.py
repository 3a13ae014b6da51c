"""
Database tests.
Tests database initialization and data integrity.
"""

import sqlite3

import pytest
from database import get_db, ensure_schema


class TestSchema:

    def test_database_tables(self, app):
        """Test that all required tables exist."""
        db = get_db()
        cursor = db.cursor()

        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        tables = [row[0] for row in cursor.fetchall()]

        required_tables = [
            'users', 'permissions', 'user_permissions', 'reservations',
            'blocked_slots', 'provider_configs', 'delivery_log'
        ]

        for table in required_tables:
            assert table in tables, f"Table {table} should exist"

    def test_seed_data(self, app):
        """Only the permission catalog is seeded; no default accounts."""
        from models.permission import PERMISSION_CATALOG

        db = get_db()
        perm_count = db.execute('SELECT COUNT(*) FROM permissions').fetchone()[0]
        user_count = db.execute('SELECT COUNT(*) FROM users').fetchone()[0]

        assert perm_count == len(PERMISSION_CATALOG)
        assert user_count == 0

    def test_ensure_schema_keeps_data(self, app, manager_user):
        """ensure_schema is a no-op on an initialized database."""
        assert ensure_schema() is False

        count = get_db().execute('SELECT COUNT(*) FROM users').fetchone()[0]
        assert count == 1


class TestReservationConstraints:
    """Storage rejects records that break the lifecycle rules."""

    def _insert(self, **overrides):
        values = {
            'id': 'r1',
            'customer_name': 'Test',
            'reservation_date': '2030-01-01',
            'reservation_time': '19:00',
            'party_size': 2,
            'status': 'pending',
            'attendance': None,
            'attendance_marked_at': None,
            'attendance_marked_by': None,
            'created_at': '2029-12-01T10:00:00+00:00',
        }
        values.update(overrides)
        columns = ', '.join(values)
        placeholders = ', '.join('?' * len(values))
        get_db().execute(
            f'INSERT INTO reservations ({columns}) VALUES ({placeholders})',
            list(values.values())
        )

    def test_unknown_status_rejected(self, app):
        with pytest.raises(sqlite3.IntegrityError):
            self._insert(status='seated')

    def test_attendance_requires_confirmed(self, app):
        with pytest.raises(sqlite3.IntegrityError):
            self._insert(
                attendance='attended',
                attendance_marked_at='2030-01-01T20:00:00+00:00',
                attendance_marked_by='staff'
            )

    def test_attendance_requires_marker(self, app):
        with pytest.raises(sqlite3.IntegrityError):
            self._insert(status='confirmed', attendance='no-show')

    def test_party_size_must_be_positive(self, app):
        with pytest.raises(sqlite3.IntegrityError):
            self._insert(party_size=0)

    def test_duplicate_blocked_slot_rejected(self, app):
        db = get_db()
        db.execute('''
            INSERT INTO blocked_slots (id, slot_date, slot_time, blocked_by, blocked_at)
            VALUES ('a', '2030-01-01', '19:00', 'manager', '2029-12-01T10:00:00+00:00')
        ''')
        with pytest.raises(sqlite3.IntegrityError):
            db.execute('''
                INSERT INTO blocked_slots (id, slot_date, slot_time, blocked_by, blocked_at)
                VALUES ('b', '2030-01-01', '19:00', 'manager', '2029-12-01T10:00:00+00:00')
            ''')
