"""
Client data access functions.
Handles client registry CRUD operations.
"""

import logging

from database import get_db, row_to_dict, write_transaction
from utils.datetime_helpers import get_today, to_iso
from utils.exceptions import ConflictError, NotFoundError
from utils.messages import get_message
from .reservation_queries import count_client_reservations

logger = logging.getLogger(__name__)

# register_date is fixed at creation
EDITABLE_FIELDS = ['first_name', 'last_name', 'dni', 'address', 'phone', 'email', 'city', 'country']


# =============================================================================
# READ OPERATIONS
# =============================================================================

def get_all_clients() -> list:
    """
    Get all clients.

    Returns:
        List of client dicts with their reservation count
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT c.*,
               (SELECT COUNT(*) FROM reservations WHERE client_id = c.id) as reservation_count
        FROM clients c
        ORDER BY c.id
    ''')
    return [row_to_dict(row) for row in cursor.fetchall()]


def get_client_by_id(client_id: int) -> dict:
    """
    Get client by ID.

    Args:
        client_id: Client ID

    Returns:
        Client dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM clients WHERE id = ?', (client_id,))
    return row_to_dict(cursor.fetchone())


def get_client_by_dni(dni: str) -> dict:
    """
    Get client by national ID.

    Args:
        dni: National ID

    Returns:
        Client dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM clients WHERE dni = ?', (dni,))
    return row_to_dict(cursor.fetchone())


def count_clients() -> int:
    """Get total number of clients."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT COUNT(*) as count FROM clients')
    return cursor.fetchone()['count']


# =============================================================================
# CREATE / UPDATE / DELETE
# =============================================================================

def create_client(first_name: str, last_name: str, dni: str, address: str, phone: str,
                  email: str, city: str, country: str, register_date=None) -> dict:
    """
    Create new client.

    Args:
        first_name: First name
        last_name: Last name
        dni: National ID (unique)
        address: Street address
        phone: Phone number
        email: Email address
        city: City
        country: Country
        register_date: Registration date (defaults to today)

    Returns:
        The created client dict

    Raises:
        ConflictError if a client with the same DNI exists
    """
    register_date = to_iso(register_date) if register_date else get_today().isoformat()

    with write_transaction() as cursor:
        cursor.execute('SELECT id FROM clients WHERE dni = ?', (dni,))
        existing = cursor.fetchone()
        if existing:
            raise ConflictError(get_message('duplicate_dni'), dni=dni, client_id=existing['id'])

        cursor.execute('''
            INSERT INTO clients
            (first_name, last_name, dni, address, phone, email, register_date, city, country)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (first_name, last_name, dni, address, phone, email, register_date, city, country))
        client_id = cursor.lastrowid

    logger.info('Client %s registered', client_id)
    return get_client_by_id(client_id)


def update_client(client_id: int, **kwargs) -> dict:
    """
    Update client fields.
    register_date is not editable and is ignored if passed.

    Args:
        client_id: Client ID to update
        **kwargs: Fields to update

    Returns:
        The updated client dict

    Raises:
        NotFoundError if the client does not exist
        ConflictError if the new DNI belongs to another client
    """
    updates = []
    values = []

    for field in EDITABLE_FIELDS:
        if field in kwargs:
            updates.append(f'{field} = ?')
            values.append(kwargs[field])

    with write_transaction() as cursor:
        cursor.execute('SELECT id FROM clients WHERE id = ?', (client_id,))
        if not cursor.fetchone():
            raise NotFoundError('client', client_id, get_message('client_not_found'))

        if 'dni' in kwargs:
            cursor.execute('SELECT id FROM clients WHERE dni = ? AND id != ?',
                           (kwargs['dni'], client_id))
            other = cursor.fetchone()
            if other:
                raise ConflictError(get_message('duplicate_dni'), dni=kwargs['dni'],
                                    client_id=other['id'])

        if updates:
            values.append(client_id)
            cursor.execute(f'UPDATE clients SET {", ".join(updates)} WHERE id = ?', values)

    return get_client_by_id(client_id)


def delete_client(client_id: int) -> bool:
    """
    Delete client (hard delete).
    Only allowed if no reservation references it.

    Args:
        client_id: Client ID to delete

    Returns:
        True if deleted, False if it did not exist

    Raises:
        ConflictError if the client has reservations
    """
    with write_transaction() as cursor:
        reservation_count = count_client_reservations(client_id)

        if reservation_count > 0:
            raise ConflictError(
                get_message('client_has_reservations'),
                client_id=client_id,
                reservation_count=reservation_count
            )

        cursor.execute('DELETE FROM clients WHERE id = ?', (client_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        logger.info('Client %s deleted', client_id)
    return deleted
