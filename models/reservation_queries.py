"""
Reservation query operations.
Handles listing, filtering, and reference counts.
"""

from database import get_db, row_to_dict
from utils.datetime_helpers import get_today
from .reservation_availability import effectively_active_sql, is_effectively_active


# =============================================================================
# LIST QUERIES
# =============================================================================

def get_all_reservations(status: str = None, unit_id: int = None, client_id: int = None) -> list:
    """
    Get reservations with optional filters.

    Args:
        status: Filter by status (optional)
        unit_id: Filter by unit (optional)
        client_id: Filter by client (optional)

    Returns:
        list: Reservation dicts ordered by start date
    """
    db = get_db()
    cursor = db.cursor()

    query = 'SELECT r.* FROM reservations r WHERE 1=1'
    params = []

    if status:
        query += ' AND r.status = ?'
        params.append(status)

    if unit_id is not None:
        query += ' AND r.unit_id = ?'
        params.append(unit_id)

    if client_id is not None:
        query += ' AND r.client_id = ?'
        params.append(client_id)

    query += ' ORDER BY r.start_date, r.id'

    cursor.execute(query, params)
    return [row_to_dict(row) for row in cursor.fetchall()]


def get_all_reservations_with_details(status: str = None, unit_id: int = None,
                                      client_id: int = None) -> list:
    """
    Same as get_all_reservations, with 'client' and 'unit' embedded,
    plus an 'effectively_active' flag as of today.

    Returns:
        list: Reservation dicts with client and unit
    """
    reservations = get_all_reservations(status=status, unit_id=unit_id, client_id=client_id)
    if not reservations:
        return []

    db = get_db()
    cursor = db.cursor()

    cursor.execute('SELECT * FROM clients')
    clients = {row['id']: row_to_dict(row) for row in cursor.fetchall()}
    cursor.execute('SELECT * FROM units')
    units = {row['id']: row_to_dict(row) for row in cursor.fetchall()}

    today = get_today()
    for reservation in reservations:
        reservation['effectively_active'] = is_effectively_active(reservation, today)
        reservation['client'] = clients.get(reservation['client_id'])
        reservation['unit'] = units.get(reservation['unit_id'])

    return reservations


def get_active_reservations(today=None) -> list:
    """
    Get reservations that are effectively active: status 'active' and not yet ended.

    Args:
        today: Reference date (defaults to today in the configured timezone)

    Returns:
        list: Reservation dicts ordered by start date
    """
    active, params = effectively_active_sql(today or get_today())

    db = get_db()
    cursor = db.cursor()
    cursor.execute(f'''
        SELECT * FROM reservations
        WHERE {active}
        ORDER BY start_date, id
    ''', params)
    return [row_to_dict(row) for row in cursor.fetchall()]


def get_unit_reservations(unit_id: int) -> list:
    """Get all reservations for a unit, oldest first."""
    return get_all_reservations(unit_id=unit_id)


def get_client_reservations(client_id: int) -> list:
    """Get all reservations for a client, oldest first."""
    return get_all_reservations(client_id=client_id)


# =============================================================================
# REFERENCE COUNTS
# =============================================================================

def count_unit_reservations(unit_id: int) -> int:
    """Number of reservations that reference a unit."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT COUNT(*) as count FROM reservations WHERE unit_id = ?', (unit_id,))
    return cursor.fetchone()['count']


def count_client_reservations(client_id: int) -> int:
    """Number of reservations that reference a client."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT COUNT(*) as count FROM reservations WHERE client_id = ?', (client_id,))
    return cursor.fetchone()['count']
