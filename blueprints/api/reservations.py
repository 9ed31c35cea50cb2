"""
Reservation API routes.
Create and update go through the lifecycle manager, which owns the
availability gate.
"""

from flask import request

from utils.api_response import api_success, api_error
from utils.helpers import get_json_body, get_bool_arg
from utils.messages import get_message
from utils.validators import validate_reservation_data, RESERVATION_STATUSES
from models.reservation import (
    get_all_reservations, get_all_reservations_with_details, get_active_reservations,
    get_reservation_with_details, create_reservation, update_reservation,
    cancel_reservation, complete_reservation, delete_reservation
)


def register_routes(bp):
    """Register reservation API routes on the blueprint."""

    # ============================================================================
    # QUERIES
    # ============================================================================

    @bp.route('/reservations')
    def reservations_list():
        """
        Get reservations.

        Query params:
            status: active / completed / cancelled (optional)
            unit_id: Filter by unit (optional)
            client_id: Filter by client (optional)
            details: 1 to embed client and unit
        """
        status = request.args.get('status')
        if status and status not in RESERVATION_STATUSES:
            return api_error(
                f'Status must be one of: {", ".join(RESERVATION_STATUSES)}',
                400, error_type='validation_error'
            )
        filters = {
            'status': status,
            'unit_id': request.args.get('unit_id', type=int),
            'client_id': request.args.get('client_id', type=int),
        }

        if get_bool_arg('details'):
            reservations = get_all_reservations_with_details(**filters)
        else:
            reservations = get_all_reservations(**filters)

        return api_success(reservations=reservations, count=len(reservations))

    @bp.route('/reservations/active')
    def reservations_active():
        """Get reservations that are active and not yet ended."""
        reservations = get_active_reservations()
        return api_success(reservations=reservations, count=len(reservations))

    @bp.route('/reservations/<int:reservation_id>')
    def reservation_detail(reservation_id):
        """Get reservation with client and unit details."""
        reservation = get_reservation_with_details(reservation_id)
        if not reservation:
            return api_error(get_message('reservation_not_found'), 404, error_type='not_found')
        return api_success(reservation=reservation)

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    @bp.route('/reservations', methods=['POST'])
    def reservation_create():
        """Create a reservation if the unit is free for the requested dates."""
        data = validate_reservation_data(get_json_body())
        reservation = create_reservation(
            client_id=data['client_id'],
            unit_id=data['unit_id'],
            start_date=data['start_date'],
            end_date=data['end_date'],
            notes=data.get('notes')
        )
        return api_success(
            reservation=reservation,
            message=get_message('reservation_created'),
            status=201
        )

    @bp.route('/reservations/<int:reservation_id>', methods=['PUT'])
    def reservation_update(reservation_id):
        """Update unit, dates, status or notes of a reservation."""
        patch = validate_reservation_data(get_json_body(), partial=True)
        reservation = update_reservation(reservation_id, **patch)
        return api_success(reservation=reservation, message=get_message('reservation_updated'))

    @bp.route('/reservations/<int:reservation_id>/cancel', methods=['POST'])
    def reservation_cancel(reservation_id):
        """Cancel a reservation, freeing its unit."""
        reservation = cancel_reservation(reservation_id)
        return api_success(reservation=reservation, message=get_message('reservation_cancelled'))

    @bp.route('/reservations/<int:reservation_id>/complete', methods=['POST'])
    def reservation_complete(reservation_id):
        """Mark a reservation as completed."""
        reservation = complete_reservation(reservation_id)
        return api_success(reservation=reservation, message=get_message('reservation_completed'))

    @bp.route('/reservations/<int:reservation_id>', methods=['DELETE'])
    def reservation_delete(reservation_id):
        """Delete a reservation."""
        if not delete_reservation(reservation_id):
            return api_error(get_message('reservation_not_found'), 404, error_type='not_found')
        return api_success(message=get_message('reservation_deleted'))
