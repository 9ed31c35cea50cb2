"""
Reservation data access functions.
Handles reservation lifecycle, availability checking, and queries.

This module re-exports all functions from the split modules:
- reservation_availability.py: Overlap rules and availability checks
- reservation_crud.py: Create, read, update, delete operations
- reservation_queries.py: Listing, filtering, and reference counts
"""

# =============================================================================
# RE-EXPORTS
# =============================================================================

# Availability engine
from .reservation_availability import (
    ACTIVE_STATUS,
    dates_overlap,
    is_effectively_active,
    overlap_sql,
    effectively_active_sql,
    blocking_sql,
    normalize_range,
    get_overlapping_reservations,
    check_availability,
    is_unit_available,
    get_conflicting_reservations,
)

# Lifecycle operations
from .reservation_crud import (
    STATUS_TRANSITIONS,
    # Read
    get_reservation_by_id,
    get_reservation_with_details,
    # Create
    create_reservation,
    # Update
    update_reservation,
    cancel_reservation,
    complete_reservation,
    # Delete
    delete_reservation,
)

# Query operations
from .reservation_queries import (
    get_all_reservations,
    get_all_reservations_with_details,
    get_active_reservations,
    get_unit_reservations,
    get_client_reservations,
    count_unit_reservations,
    count_client_reservations,
)

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Constants
    'ACTIVE_STATUS',
    'STATUS_TRANSITIONS',

    # Availability
    'dates_overlap',
    'is_effectively_active',
    'overlap_sql',
    'effectively_active_sql',
    'blocking_sql',
    'normalize_range',
    'get_overlapping_reservations',
    'check_availability',
    'is_unit_available',
    'get_conflicting_reservations',

    # Lifecycle
    'get_reservation_by_id',
    'get_reservation_with_details',
    'create_reservation',
    'update_reservation',
    'cancel_reservation',
    'complete_reservation',
    'delete_reservation',

    # Queries
    'get_all_reservations',
    'get_all_reservations_with_details',
    'get_active_reservations',
    'get_unit_reservations',
    'get_client_reservations',
    'count_unit_reservations',
    'count_client_reservations',
]
