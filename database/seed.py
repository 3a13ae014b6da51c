"""
Database seed data.
Initial data population for fresh database installations.

Only the permission catalog is seeded. Staff accounts are never seeded;
the first manager is created through first-run setup.
"""


def seed_database(db):
    """Insert initial seed data."""
    from models.permission import PERMISSION_CATALOG

    for order, (code, name, description) in enumerate(PERMISSION_CATALOG, start=1):
        db.execute('''
            INSERT INTO permissions (code, name, description, display_order)
            VALUES (?, ?, ?, ?)
        ''', (code, name, description, order))
