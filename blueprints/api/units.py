"""
Unit (wheelchair) API routes.
"""

from utils.api_response import api_success, api_error
from utils.helpers import get_json_body
from utils.messages import get_message
from utils.validators import validate_unit_data
from models.unit import (
    get_all_units, get_unit_by_id, create_unit, update_unit, delete_unit
)


def register_routes(bp):
    """Register unit API routes on the blueprint."""

    @bp.route('/units')
    def units_list():
        """Get all units."""
        units = get_all_units()
        return api_success(units=units, count=len(units))

    @bp.route('/units/<int:unit_id>')
    def unit_detail(unit_id):
        """Get a single unit."""
        unit = get_unit_by_id(unit_id)
        if not unit:
            return api_error(get_message('unit_not_found'), 404, error_type='not_found')
        return api_success(unit=unit)

    @bp.route('/units', methods=['POST'])
    def unit_create():
        """Create a unit."""
        data = validate_unit_data(get_json_body())
        unit = create_unit(**data)
        return api_success(unit=unit, message=get_message('unit_created'), status=201)

    @bp.route('/units/<int:unit_id>', methods=['PUT'])
    def unit_update(unit_id):
        """Update unit attributes (partial)."""
        data = validate_unit_data(get_json_body(), partial=True)
        unit = update_unit(unit_id, **data)
        return api_success(unit=unit, message=get_message('unit_updated'))

    @bp.route('/units/<int:unit_id>', methods=['DELETE'])
    def unit_delete(unit_id):
        """Delete a unit that has no reservations."""
        if not delete_unit(unit_id):
            return api_error(get_message('unit_not_found'), 404, error_type='not_found')
        return api_success(message=get_message('unit_deleted'))
