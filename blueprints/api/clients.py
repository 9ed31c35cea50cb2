"""
Client API routes.
"""

from utils.api_response import api_success, api_error
from utils.helpers import get_json_body
from utils.messages import get_message
from utils.validators import validate_client_data
from models.client import (
    get_all_clients, get_client_by_id, create_client, update_client, delete_client
)
from models.reservation import get_client_reservations


def register_routes(bp):
    """Register client API routes on the blueprint."""

    @bp.route('/clients')
    def clients_list():
        """Get all clients."""
        clients = get_all_clients()
        return api_success(clients=clients, count=len(clients))

    @bp.route('/clients/<int:client_id>')
    def client_detail(client_id):
        """Get a single client."""
        client = get_client_by_id(client_id)
        if not client:
            return api_error(get_message('client_not_found'), 404, error_type='not_found')
        return api_success(client=client)

    @bp.route('/clients/<int:client_id>/reservations')
    def client_reservations(client_id):
        """Get the reservation history of a client."""
        if not get_client_by_id(client_id):
            return api_error(get_message('client_not_found'), 404, error_type='not_found')
        reservations = get_client_reservations(client_id)
        return api_success(reservations=reservations, count=len(reservations))

    @bp.route('/clients', methods=['POST'])
    def client_create():
        """Register a client."""
        data = validate_client_data(get_json_body())
        client = create_client(**data)
        return api_success(client=client, message=get_message('client_created'), status=201)

    @bp.route('/clients/<int:client_id>', methods=['PUT'])
    def client_update(client_id):
        """Update client fields (partial). register_date never changes."""
        data = validate_client_data(get_json_body(), partial=True)
        client = update_client(client_id, **data)
        return api_success(client=client, message=get_message('client_updated'))

    @bp.route('/clients/<int:client_id>', methods=['DELETE'])
    def client_delete(client_id):
        """Delete a client that has no reservations."""
        if not delete_client(client_id):
            return api_error(get_message('client_not_found'), 404, error_type='not_found')
        return api_success(message=get_message('client_deleted'))
