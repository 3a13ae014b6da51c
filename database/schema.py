"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'delivery_log',
        'provider_configs',
        'blocked_slots',
        'reservations',
        'user_permissions',
        'permissions',
        'users'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Users & Auth Tables
    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE NOT NULL,
            email TEXT NOT NULL,
            password_hash TEXT NOT NULL,
            full_name TEXT,
            role TEXT NOT NULL DEFAULT 'staff' CHECK (role IN ('manager', 'staff')),
            is_active INTEGER DEFAULT 1,
            created_by TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE permissions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            code TEXT UNIQUE NOT NULL,
            name TEXT NOT NULL,
            description TEXT,
            display_order INTEGER DEFAULT 0
        )
    ''')

    db.execute('''
        CREATE TABLE user_permissions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            permission_id INTEGER NOT NULL REFERENCES permissions(id) ON DELETE CASCADE,
            granted_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(user_id, permission_id)
        )
    ''')

    # 2. Reservations
    db.execute('''
        CREATE TABLE reservations (
            id TEXT PRIMARY KEY,
            customer_name TEXT NOT NULL,
            email TEXT,
            phone TEXT,
            reservation_date TEXT NOT NULL,
            reservation_time TEXT NOT NULL,
            party_size INTEGER NOT NULL CHECK (party_size > 0),
            special_requests TEXT,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'confirmed', 'declined')),
            attendance TEXT CHECK (attendance IN ('attended', 'no-show')),
            attendance_marked_at TEXT,
            attendance_marked_by TEXT,
            communication_preference TEXT NOT NULL DEFAULT 'email'
                CHECK (communication_preference IN ('email', 'sms', 'whatsapp')),
            created_at TEXT NOT NULL,
            updated_at TEXT,
            CHECK (attendance IS NULL OR status = 'confirmed'),
            CHECK ((attendance IS NULL) = (attendance_marked_at IS NULL)),
            CHECK ((attendance IS NULL) = (attendance_marked_by IS NULL))
        )
    ''')

    db.execute('''
        CREATE TABLE blocked_slots (
            id TEXT PRIMARY KEY,
            slot_date TEXT NOT NULL,
            slot_time TEXT NOT NULL,
            reason TEXT,
            blocked_by TEXT NOT NULL,
            blocked_at TEXT NOT NULL,
            UNIQUE(slot_date, slot_time)
        )
    ''')

    # 3. Notifications
    db.execute('''
        CREATE TABLE provider_configs (
            provider TEXT PRIMARY KEY,
            channel TEXT NOT NULL CHECK (channel IN ('email', 'sms', 'whatsapp', 'any')),
            settings TEXT NOT NULL,
            is_active INTEGER DEFAULT 1,
            updated_by TEXT,
            updated_at TEXT
        )
    ''')

    db.execute('''
        CREATE TABLE delivery_log (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            reservation_id TEXT,
            kind TEXT NOT NULL,
            channel TEXT,
            provider TEXT,
            recipient TEXT,
            subject TEXT,
            message TEXT,
            status TEXT NOT NULL,
            error TEXT,
            compose_url TEXT,
            created_at TEXT NOT NULL
        )
    ''')


def create_indexes(db):
    """Create performance indexes."""

    # Reservation indexes
    db.execute('CREATE INDEX idx_reservations_slot ON reservations(reservation_date, reservation_time)')
    db.execute('CREATE INDEX idx_reservations_status ON reservations(status)')

    # Permission indexes
    db.execute('CREATE INDEX idx_permissions_code ON permissions(code)')
    db.execute('CREATE INDEX idx_user_perms ON user_permissions(user_id, permission_id)')

    # Delivery log indexes
    db.execute('CREATE INDEX idx_delivery_log_reservation ON delivery_log(reservation_id)')
    db.execute('CREATE INDEX idx_delivery_log_created ON delivery_log(created_at)')
