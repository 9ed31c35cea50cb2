"""
Reservation lifecycle operations.
Handles create, read, update, delete for reservations, gated by the
availability engine.

Every write runs inside write_transaction(), so the availability check and
the write it guards are one serialized unit of work: two concurrent
requests for the same unit can never both pass the check.
"""

import logging

from database import get_db, row_to_dict, write_transaction
from utils.datetime_helpers import get_today
from utils.exceptions import ConflictError, NotFoundError, ValidationError
from utils.messages import get_message
from utils.validators import RESERVATION_STATUSES
from .reservation_availability import (
    ACTIVE_STATUS, normalize_range, is_unit_available, get_conflicting_reservations,
    is_effectively_active
)
from .unit import increment_rental_count

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ('unit_id', 'start_date', 'end_date', 'status', 'notes')

# Allowed status transitions; completed and cancelled are terminal
STATUS_TRANSITIONS = {
    'active': {'active', 'completed', 'cancelled'},
    'completed': {'completed'},
    'cancelled': {'cancelled'},
}


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int) -> dict:
    """
    Get reservation by ID.

    Args:
        reservation_id: Reservation ID

    Returns:
        Reservation dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM reservations WHERE id = ?', (reservation_id,))
    return row_to_dict(cursor.fetchone())


def get_reservation_with_details(reservation_id: int) -> dict:
    """
    Get reservation with its client and unit embedded.

    Args:
        reservation_id: Reservation ID

    Returns:
        dict: Reservation with 'client' and 'unit' keys and the
        'effectively_active' flag, or None if not found
    """
    reservation = get_reservation_by_id(reservation_id)
    if not reservation:
        return None

    reservation['effectively_active'] = is_effectively_active(reservation, get_today())

    db = get_db()
    cursor = db.cursor()

    cursor.execute('SELECT * FROM clients WHERE id = ?', (reservation['client_id'],))
    reservation['client'] = row_to_dict(cursor.fetchone())

    cursor.execute('SELECT * FROM units WHERE id = ?', (reservation['unit_id'],))
    reservation['unit'] = row_to_dict(cursor.fetchone())

    return reservation


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(client_id: int, unit_id: int, start_date, end_date,
                       notes: str = None) -> dict:
    """
    Create a reservation after all preconditions pass.

    Checks, in order, first failure wins:
    1. client exists
    2. unit exists
    3. start_date < end_date
    4. the unit has no overlapping active reservation

    On success the reservation is stored as 'active' and the unit's
    rental_count goes up by one, in the same transaction.

    Args:
        client_id: Client ID
        unit_id: Unit ID
        start_date: Start date (date or YYYY-MM-DD)
        end_date: End date (date or YYYY-MM-DD)
        notes: Free-text notes (optional)

    Returns:
        dict: The created reservation

    Raises:
        NotFoundError, InvalidRangeError, ConflictError, StoreError
    """
    with write_transaction() as cursor:
        cursor.execute('SELECT id FROM clients WHERE id = ?', (client_id,))
        if not cursor.fetchone():
            raise NotFoundError('client', client_id, get_message('client_not_found'))

        cursor.execute('SELECT id FROM units WHERE id = ?', (unit_id,))
        if not cursor.fetchone():
            raise NotFoundError('unit', unit_id, get_message('unit_not_found'))

        start, end = normalize_range(start_date, end_date)

        if not is_unit_available(unit_id, start, end):
            conflicts = get_conflicting_reservations(unit_id, start, end)
            logger.warning('Rejected booking of unit %s for %s..%s: %d conflict(s)',
                           unit_id, start, end, len(conflicts))
            raise ConflictError(
                get_message('unit_unavailable'),
                unit_id=unit_id,
                conflicts=conflicts
            )

        cursor.execute('''
            INSERT INTO reservations (client_id, unit_id, start_date, end_date, status, notes)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (client_id, unit_id, start.isoformat(), end.isoformat(), ACTIVE_STATUS, notes))
        reservation_id = cursor.lastrowid

        increment_rental_count(cursor, unit_id)

    logger.info('Reservation %s created: client %s, unit %s, %s..%s',
                reservation_id, client_id, unit_id, start, end)
    return get_reservation_by_id(reservation_id)


# =============================================================================
# UPDATE
# =============================================================================

def _check_status_transition(current: str, new: str) -> None:
    if new not in RESERVATION_STATUSES:
        raise ValidationError(
            'Invalid reservation status',
            errors={'status': f'Must be one of: {", ".join(RESERVATION_STATUSES)}'}
        )
    if new not in STATUS_TRANSITIONS[current]:
        raise ValidationError(
            get_message('invalid_status_transition', current=current, new=new),
            errors={'status': f'{current} is final'}
        )


def update_reservation(reservation_id: int, **patch) -> dict:
    """
    Update a reservation.

    Accepts any subset of unit_id, start_date, end_date, status, notes;
    other keys are ignored. When unit or dates change on a reservation that
    stays active, the new range is validated and checked against every
    other active reservation of the effective unit. Cancelling never needs
    an availability check. rental_count is never touched here.

    Args:
        reservation_id: Reservation ID
        **patch: Fields to change

    Returns:
        dict: The updated reservation

    Raises:
        NotFoundError, InvalidRangeError, ValidationError, ConflictError, StoreError
    """
    patch = {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS}

    with write_transaction() as cursor:
        cursor.execute('SELECT * FROM reservations WHERE id = ?', (reservation_id,))
        existing = row_to_dict(cursor.fetchone())
        if not existing:
            raise NotFoundError('reservation', reservation_id, get_message('reservation_not_found'))

        new_status = patch.get('status', existing['status'])
        if 'status' in patch:
            _check_status_transition(existing['status'], new_status)

        touches_booking = any(field in patch for field in ('unit_id', 'start_date', 'end_date'))
        unit_id = patch.get('unit_id', existing['unit_id'])
        start, end = existing['start_date'], existing['end_date']

        if touches_booking:
            if 'unit_id' in patch:
                cursor.execute('SELECT id FROM units WHERE id = ?', (unit_id,))
                if not cursor.fetchone():
                    raise NotFoundError('unit', unit_id, get_message('unit_not_found'))

            start, end = normalize_range(
                patch.get('start_date', existing['start_date']),
                patch.get('end_date', existing['end_date'])
            )

            if new_status == ACTIVE_STATUS and not is_unit_available(
                unit_id, start, end, exclude_reservation_id=reservation_id
            ):
                conflicts = get_conflicting_reservations(
                    unit_id, start, end, exclude_reservation_id=reservation_id
                )
                logger.warning('Rejected move of reservation %s to unit %s for %s..%s',
                               reservation_id, unit_id, start, end)
                raise ConflictError(
                    get_message('unit_unavailable'),
                    unit_id=unit_id,
                    reservation_id=reservation_id,
                    conflicts=conflicts
                )
            start, end = start.isoformat(), end.isoformat()

        notes = patch['notes'] if 'notes' in patch else existing['notes']

        cursor.execute('''
            UPDATE reservations
            SET unit_id = ?,
                start_date = ?,
                end_date = ?,
                status = ?,
                notes = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (unit_id, start, end, new_status, notes, reservation_id))

    if new_status != existing['status']:
        logger.info('Reservation %s: %s -> %s', reservation_id, existing['status'], new_status)
    return get_reservation_by_id(reservation_id)


def cancel_reservation(reservation_id: int) -> dict:
    """Shortcut to set status 'cancelled'."""
    return update_reservation(reservation_id, status='cancelled')


def complete_reservation(reservation_id: int) -> dict:
    """Shortcut to set status 'completed'."""
    return update_reservation(reservation_id, status='completed')


# =============================================================================
# DELETE
# =============================================================================

def delete_reservation(reservation_id: int) -> bool:
    """
    Delete a reservation unconditionally.
    The unit's rental_count is left as is.

    Args:
        reservation_id: Reservation ID

    Returns:
        True if deleted, False if it did not exist
    """
    with write_transaction() as cursor:
        cursor.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        logger.info('Reservation %s deleted', reservation_id)
    return deleted
