"""
Rentable unit (wheelchair) data access functions.
Handles unit CRUD operations and the per-unit rental counter.
"""

import logging

from database import get_db, row_to_dict, write_transaction
from utils.datetime_helpers import to_iso
from utils.exceptions import ConflictError, NotFoundError
from utils.messages import get_message
from .reservation_queries import count_unit_reservations

logger = logging.getLogger(__name__)

# rental_count is owned by the reservation lifecycle, never edited directly
EDITABLE_FIELDS = ['model', 'brand', 'year', 'motor', 'wheel_size', 'last_service']


def get_all_units() -> list:
    """
    Get all units.

    Returns:
        List of unit dicts ordered by ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM units ORDER BY id')
    return [row_to_dict(row) for row in cursor.fetchall()]


def get_unit_by_id(unit_id: int) -> dict:
    """
    Get unit by ID.

    Args:
        unit_id: Unit ID

    Returns:
        Unit dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM units WHERE id = ?', (unit_id,))
    return row_to_dict(cursor.fetchone())


def count_units() -> int:
    """Get total number of units."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT COUNT(*) as count FROM units')
    return cursor.fetchone()['count']


def create_unit(model: str, brand: str, year: int, motor: str, wheel_size: str,
                last_service: str = None) -> dict:
    """
    Create new unit. The rental counter always starts at zero.

    Args:
        model: Model name
        brand: Brand name
        year: Manufacturing year
        motor: Motor power rating
        wheel_size: Wheel size
        last_service: Last service date (YYYY-MM-DD, optional)

    Returns:
        The created unit dict
    """
    last_service = to_iso(last_service) if last_service else None

    with write_transaction() as cursor:
        cursor.execute('''
            INSERT INTO units (model, brand, year, motor, wheel_size, last_service, rental_count)
            VALUES (?, ?, ?, ?, ?, ?, 0)
        ''', (model, brand, year, motor, wheel_size, last_service))
        unit_id = cursor.lastrowid

    logger.info('Unit %s created (%s %s)', unit_id, brand, model)
    return get_unit_by_id(unit_id)


def update_unit(unit_id: int, **kwargs) -> dict:
    """
    Update unit attribute fields.

    Args:
        unit_id: Unit ID to update
        **kwargs: Fields to update (rental_count and unknown fields are ignored)

    Returns:
        The updated unit dict

    Raises:
        NotFoundError if the unit does not exist
    """
    if kwargs.get('last_service'):
        kwargs['last_service'] = to_iso(kwargs['last_service'])

    updates = []
    values = []

    for field in EDITABLE_FIELDS:
        if field in kwargs:
            updates.append(f'{field} = ?')
            values.append(kwargs[field])

    with write_transaction() as cursor:
        cursor.execute('SELECT id FROM units WHERE id = ?', (unit_id,))
        if not cursor.fetchone():
            raise NotFoundError('unit', unit_id, get_message('unit_not_found'))

        if updates:
            values.append(unit_id)
            cursor.execute(f'UPDATE units SET {", ".join(updates)} WHERE id = ?', values)

    return get_unit_by_id(unit_id)


def increment_rental_count(cursor, unit_id: int) -> None:
    """
    Add one rental to a unit's counter.
    Runs on the caller's transaction cursor so it commits together with the reservation.

    Args:
        cursor: Cursor of an open write transaction
        unit_id: Unit ID
    """
    cursor.execute('''
        UPDATE units SET rental_count = rental_count + 1
        WHERE id = ?
    ''', (unit_id,))
    if cursor.rowcount != 1:
        raise NotFoundError('unit', unit_id, get_message('unit_not_found'))


def delete_unit(unit_id: int) -> bool:
    """
    Delete unit (hard delete).
    Only allowed if no reservation references it.

    Args:
        unit_id: Unit ID to delete

    Returns:
        True if deleted, False if it did not exist

    Raises:
        ConflictError if the unit has reservations
    """
    with write_transaction() as cursor:
        reservation_count = count_unit_reservations(unit_id)

        if reservation_count > 0:
            raise ConflictError(
                get_message('unit_has_reservations'),
                unit_id=unit_id,
                reservation_count=reservation_count
            )

        cursor.execute('DELETE FROM units WHERE id = ?', (unit_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        logger.info('Unit %s deleted', unit_id)
    return deleted
