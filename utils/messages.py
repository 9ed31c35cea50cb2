"""
Centralized user-facing messages.
All API text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'unit_created': 'Wheelchair created successfully',
    'unit_updated': 'Wheelchair updated successfully',
    'unit_deleted': 'Wheelchair deleted',
    'client_created': 'Client created successfully',
    'client_updated': 'Client updated successfully',
    'client_deleted': 'Client deleted',
    'reservation_created': 'Reservation created successfully',
    'reservation_updated': 'Reservation updated successfully',
    'reservation_cancelled': 'Reservation cancelled',
    'reservation_completed': 'Reservation completed',
    'reservation_deleted': 'Reservation deleted',

    # Error messages
    'unit_not_found': 'Wheelchair not found',
    'client_not_found': 'Client not found',
    'reservation_not_found': 'Reservation not found',
    'invalid_date_range': 'End date must be after start date',
    'dates_required': 'Start date and end date are required',
    'unit_unavailable': 'Wheelchair is not available for the requested dates',
    'unit_has_reservations': 'Cannot delete a wheelchair that has reservations',
    'client_has_reservations': 'Cannot delete a client that has reservations',
    'duplicate_dni': 'A client with this DNI already exists',
    'constraint_violation': 'The change breaks a data integrity rule',
    'invalid_status_transition': 'Reservation status cannot change from {current} to {new}',
    'json_required': 'A JSON body is required',
    'store_unavailable': 'The reservation store is unavailable, please retry',
    'internal_error': 'Internal server error',
    'route_not_found': 'Resource not found',
    'method_not_allowed': 'Method not allowed',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
