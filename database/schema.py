"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'reservations',
        'clients',
        'units',
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Rentable units (wheelchairs)
    db.execute('''
        CREATE TABLE units (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            model TEXT NOT NULL,
            brand TEXT NOT NULL,
            year INTEGER NOT NULL,
            motor TEXT NOT NULL,
            wheel_size TEXT NOT NULL,
            last_service DATE,
            rental_count INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 2. Client registry
    db.execute('''
        CREATE TABLE clients (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            dni TEXT UNIQUE NOT NULL,
            address TEXT NOT NULL,
            phone TEXT NOT NULL,
            email TEXT NOT NULL,
            register_date DATE NOT NULL,
            city TEXT NOT NULL,
            country TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Reservations linking one client to one unit for a date range
    db.execute('''
        CREATE TABLE reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            client_id INTEGER NOT NULL REFERENCES clients(id),
            unit_id INTEGER NOT NULL REFERENCES units(id),
            start_date DATE NOT NULL,
            end_date DATE NOT NULL,
            status TEXT NOT NULL DEFAULT 'active'
                CHECK (status IN ('active', 'completed', 'cancelled')),
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            CHECK (start_date < end_date)
        )
    ''')


def create_indexes(db):
    """Create indexes for the availability and listing queries."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_reservations_unit_status ON reservations(unit_id, status)',
        'CREATE INDEX IF NOT EXISTS idx_reservations_dates ON reservations(start_date, end_date)',
        'CREATE INDEX IF NOT EXISTS idx_reservations_client ON reservations(client_id)',
        'CREATE INDEX IF NOT EXISTS idx_reservations_status_end ON reservations(status, end_date)',
    ]

    for sql in indexes:
        db.execute(sql)
