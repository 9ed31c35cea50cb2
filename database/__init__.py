"""
Database package for the Wheelchair Rental system.

This package provides modular database operations:
- connection: Database connection management (get_db, close_db, init_db, write_transaction)
- schema: Table creation and indexes
- seed: Initial seed data

All functions are re-exported from this module.
"""

from database.connection import get_db, close_db, init_db, write_transaction, row_to_dict
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database, SAMPLE_UNITS

__all__ = [
    # Connection
    'get_db',
    'close_db',
    'init_db',
    'write_transaction',
    'row_to_dict',
    # Schema
    'drop_tables',
    'create_tables',
    'create_indexes',
    # Seed
    'seed_database',
    'SAMPLE_UNITS',
]
