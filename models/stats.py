"""
Dashboard statistics.
Summary counts derived from the current store state as of a given day.
"""

from database import get_db
from utils.datetime_helpers import get_today
from .reservation_availability import effectively_active_sql


def get_dashboard_stats(today=None) -> dict:
    """
    Get dashboard summary counts.

    A reservation counts as active when its status is 'active' and its end
    date has not passed. A unit is unavailable when any such reservation
    references it.

    Args:
        today: Reference date (defaults to today in the configured timezone)

    Returns:
        dict: {
            'available_units': int,
            'total_units': int,
            'active_reservations': int,
            'total_clients': int
        }
    """
    active, params = effectively_active_sql(today or get_today())

    db = get_db()
    cursor = db.cursor()

    cursor.execute('SELECT COUNT(*) as count FROM units')
    total_units = cursor.fetchone()['count']

    cursor.execute('SELECT COUNT(*) as count FROM clients')
    total_clients = cursor.fetchone()['count']

    cursor.execute(f'''
        SELECT COUNT(*) as active_count,
               COUNT(DISTINCT unit_id) as booked_units
        FROM reservations
        WHERE {active}
    ''', params)
    row = cursor.fetchone()

    return {
        'available_units': total_units - row['booked_units'],
        'total_units': total_units,
        'active_reservations': row['active_count'],
        'total_clients': total_clients
    }
