"""
Availability engine.
Decides which units are free for a date range and whether a specific unit
can be booked, over the current set of active reservations.

Two ranges [s1, e1] and [s2, e2] overlap when s1 <= e2 AND e1 >= s2. Both
ends are inclusive, so a reservation ending on the day another begins is a
conflict. Only reservations with status 'active' block a unit; completed and
cancelled ones never do, whatever their dates.
"""

from datetime import date

from database import get_db, row_to_dict
from utils.datetime_helpers import parse_date
from utils.exceptions import InvalidRangeError

ACTIVE_STATUS = 'active'


# =============================================================================
# PREDICATES
# =============================================================================

def dates_overlap(start1, end1, start2, end2) -> bool:
    """
    Inclusive date range overlap.

    Args:
        start1, end1: First range
        start2, end2: Second range

    Returns:
        bool: True if the ranges share at least one day
    """
    return parse_date(start1) <= parse_date(end2) and parse_date(end1) >= parse_date(start2)


def is_effectively_active(reservation: dict, today: date) -> bool:
    """
    Whether a reservation still counts as active on a given day.

    Status and expiry are independent: an 'active' reservation whose end
    date has passed is no longer effectively active.

    Args:
        reservation: Reservation dict (status, end_date)
        today: Reference date

    Returns:
        bool
    """
    return (
        reservation['status'] == ACTIVE_STATUS
        and parse_date(reservation['end_date']) >= parse_date(today)
    )


# SQL forms of the predicates above. Every query that filters on overlap or
# on "effectively active" builds its WHERE clause from these.

def overlap_sql(start_date, end_date, alias: str = '') -> tuple:
    """
    SQL form of dates_overlap against [start_date, end_date].

    Args:
        start_date: Range start
        end_date: Range end
        alias: Table alias prefix, e.g. 'r.'

    Returns:
        tuple: (WHERE fragment, params)
    """
    start = parse_date(start_date, 'start_date').isoformat()
    end = parse_date(end_date, 'end_date').isoformat()
    return f'{alias}start_date <= ? AND {alias}end_date >= ?', [end, start]


def effectively_active_sql(today, alias: str = '') -> tuple:
    """
    SQL form of is_effectively_active.

    Returns:
        tuple: (WHERE fragment, params)
    """
    return (
        f'{alias}status = ? AND {alias}end_date >= ?',
        [ACTIVE_STATUS, parse_date(today).isoformat()]
    )


def blocking_sql(start_date, end_date, alias: str = '') -> tuple:
    """
    Active reservations overlapping [start_date, end_date]: the ones that block a unit.

    Returns:
        tuple: (WHERE fragment, params)
    """
    fragment, params = overlap_sql(start_date, end_date, alias)
    return f'{alias}status = ? AND {fragment}', [ACTIVE_STATUS] + params


def normalize_range(start_date, end_date) -> tuple:
    """
    Parse a date range and enforce start strictly before end.

    Returns:
        tuple: (start, end) as datetime.date

    Raises:
        ValidationError for malformed dates, InvalidRangeError if start >= end
    """
    start = parse_date(start_date, 'start_date')
    end = parse_date(end_date, 'end_date')
    if start >= end:
        raise InvalidRangeError(start, end)
    return start, end


# =============================================================================
# QUERIES
# =============================================================================

def get_overlapping_reservations(
    start_date,
    end_date,
    unit_id: int = None,
    exclude_reservation_id: int = None
) -> list:
    """
    Get active reservations whose range overlaps [start_date, end_date].

    Args:
        start_date: Range start (date or YYYY-MM-DD)
        end_date: Range end (date or YYYY-MM-DD)
        unit_id: Only reservations for this unit (optional)
        exclude_reservation_id: Reservation ID to ignore (for updates)

    Returns:
        list: Overlapping reservation dicts
    """
    blocking, params = blocking_sql(start_date, end_date, alias='r.')

    db = get_db()
    cursor = db.cursor()

    query = f'''
        SELECT r.*
        FROM reservations r
        WHERE {blocking}
    '''

    if unit_id is not None:
        query += ' AND r.unit_id = ?'
        params.append(unit_id)

    # Exclude specific reservation (for updates)
    if exclude_reservation_id is not None:
        query += ' AND r.id != ?'
        params.append(exclude_reservation_id)

    query += ' ORDER BY r.start_date, r.id'

    cursor.execute(query, params)
    return [row_to_dict(row) for row in cursor.fetchall()]


def check_availability(start_date, end_date) -> dict:
    """
    Find every unit that is free for the whole date range.

    Args:
        start_date: Range start (date or YYYY-MM-DD)
        end_date: Range end (date or YYYY-MM-DD), strictly after start

    Returns:
        dict: {
            'available': bool,
            'available_units': [unit dict, ...]
        }

    Raises:
        InvalidRangeError if start_date is not before end_date
    """
    start, end = normalize_range(start_date, end_date)

    overlapping = get_overlapping_reservations(start, end)
    booked_unit_ids = {r['unit_id'] for r in overlapping}

    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM units ORDER BY id')
    available_units = [
        row_to_dict(row) for row in cursor.fetchall()
        if row['id'] not in booked_unit_ids
    ]

    return {
        'available': len(available_units) > 0,
        'available_units': available_units
    }


def is_unit_available(unit_id: int, start_date, end_date,
                      exclude_reservation_id: int = None) -> bool:
    """
    Check if one unit can be booked for a date range.
    This is the gate used by the lifecycle manager on create and update.

    Args:
        unit_id: Unit ID
        start_date: Range start (date or YYYY-MM-DD)
        end_date: Range end (date or YYYY-MM-DD)
        exclude_reservation_id: Reservation being edited, never conflicts with itself

    Returns:
        bool: True if no other active reservation on the unit overlaps
    """
    blocking, params = blocking_sql(start_date, end_date)

    db = get_db()
    cursor = db.cursor()

    query = f'''
        SELECT COUNT(*) as count
        FROM reservations
        WHERE unit_id = ?
          AND {blocking}
    '''
    params = [unit_id] + params

    if exclude_reservation_id is not None:
        query += ' AND id != ?'
        params.append(exclude_reservation_id)

    cursor.execute(query, params)
    return cursor.fetchone()['count'] == 0


def get_conflicting_reservations(unit_id: int, start_date, end_date,
                                 exclude_reservation_id: int = None) -> list:
    """
    Get the active reservations blocking a unit for a range.
    Useful for telling the caller what to move around.

    Args:
        unit_id: Unit ID
        start_date: Range start
        end_date: Range end
        exclude_reservation_id: Reservation to exclude

    Returns:
        list: [{'reservation_id', 'client_id', 'start_date', 'end_date'}, ...]
    """
    conflicts = get_overlapping_reservations(
        start_date, end_date,
        unit_id=unit_id,
        exclude_reservation_id=exclude_reservation_id
    )
    return [{
        'reservation_id': r['id'],
        'client_id': r['client_id'],
        'start_date': r['start_date'],
        'end_date': r['end_date']
    } for r in conflicts]
