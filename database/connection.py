"""
Database connection management.
Handles per-context connections, write transactions, initialization, and teardown.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime

from flask import g, current_app

from utils.exceptions import ConflictError, StoreError
from utils.messages import get_message

logger = logging.getLogger(__name__)

# Calendar dates travel as ISO strings in and out of the store
sqlite3.register_adapter(date, lambda value: value.isoformat())
sqlite3.register_converter('DATE', lambda raw: date.fromisoformat(raw.decode()[:10]))
sqlite3.register_converter('TIMESTAMP', lambda raw: datetime.fromisoformat(raw.decode()))


def get_db():
    """
    Get the database connection for the current application context.

    Opens the connection lazily with a row factory, foreign keys, WAL
    journaling, and a busy timeout so writers queue on the SQLite lock.

    Returns:
        sqlite3.Connection: Database connection object

    Raises:
        StoreError: If the database cannot be opened
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/wheelchair_rental.db')
        timeout = current_app.config.get('DATABASE_TIMEOUT', 10)

        directory = os.path.dirname(db_path)
        if db_path != ':memory:' and directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

        try:
            g.db = sqlite3.connect(
                db_path,
                timeout=timeout,
                detect_types=sqlite3.PARSE_DECLTYPES
            )
            g.db.row_factory = sqlite3.Row
            # Enable foreign key constraints
            g.db.execute('PRAGMA foreign_keys = ON')
            # Enable WAL mode so readers never block on the writer
            g.db.execute('PRAGMA journal_mode = WAL')
        except sqlite3.Error as e:
            g.pop('db', None)
            logger.error('Could not open database %s: %s', db_path, e)
            raise StoreError(get_message('store_unavailable'), reason=str(e)) from e
    return g.db


def row_to_dict(row) -> dict:
    """
    Convert a sqlite3.Row into a JSON-ready dict.
    Date and timestamp columns come back as date/datetime objects, convert to ISO strings.
    """
    if row is None:
        return None
    result = dict(row)
    for key, value in result.items():
        if isinstance(value, (date, datetime)):
            result[key] = value.isoformat()
    return result


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        db.close()


@contextmanager
def write_transaction():
    """
    Run a block of writes as a single serialized unit of work.

    BEGIN IMMEDIATE takes the SQLite write lock up front, so every
    check-then-act sequence inside the block sees the latest committed
    state and no other writer can commit in between. Commits on success,
    rolls back on any exception. Constraint violations surface as
    ConflictError, which retrying cannot fix; other sqlite3 errors surface
    as the retryable StoreError.

    Yields:
        sqlite3.Cursor bound to the open transaction
    """
    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('BEGIN IMMEDIATE')
    except sqlite3.Error as e:
        logger.error('Could not start write transaction: %s', e)
        raise StoreError(get_message('store_unavailable'), reason=str(e)) from e

    try:
        yield cursor
        db.commit()
    except sqlite3.IntegrityError as e:
        db.rollback()
        logger.warning('Write transaction rejected by constraint: %s', e)
        raise ConflictError(get_message('constraint_violation'), reason=str(e)) from e
    except sqlite3.Error as e:
        db.rollback()
        logger.error('Write transaction failed: %s', e)
        raise StoreError(get_message('store_unavailable'), reason=str(e)) from e
    except Exception:
        db.rollback()
        raise


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()

    # Drop existing tables (in reverse order of dependencies)
    drop_tables(db)

    # Create all tables
    create_tables(db)

    # Create indexes
    create_indexes(db)

    # Insert seed data
    if current_app.config.get('SEED_SAMPLE_UNITS', True):
        seed_database(db)

    db.commit()
    logger.info('Database initialized at %s', current_app.config.get('DATABASE_PATH'))
