"""
Availability, dashboard statistics, and health API routes.
"""

from flask import current_app

from utils.api_response import api_success, api_error
from utils.helpers import get_first_arg
from utils.messages import get_message
from models.reservation import check_availability
from models.stats import get_dashboard_stats


def register_routes(bp):
    """Register availability and stats API routes on the blueprint."""

    @bp.route('/health')
    def health_check():
        """
        Health check endpoint.

        Returns:
            JSON with status and version
        """
        return api_success(
            status='ok',
            version=current_app.config.get('APP_VERSION', '1.0.0'),
            app=current_app.config.get('APP_NAME', 'Wheelchair Rental')
        )

    @bp.route('/availability')
    def availability():
        """
        Get units free for a date range.

        Query params:
            start (or startDate): Range start (YYYY-MM-DD)
            end (or endDate): Range end (YYYY-MM-DD), after start
        """
        start = get_first_arg('start', 'start_date', 'startDate')
        end = get_first_arg('end', 'end_date', 'endDate')

        if not start or not end:
            return api_error(get_message('dates_required'), 400, error_type='validation_error')

        result = check_availability(start, end)
        return api_success(
            available=result['available'],
            available_units=result['available_units'],
            count=len(result['available_units'])
        )

    @bp.route('/stats')
    def stats():
        """Get dashboard statistics as of today."""
        return api_success(stats=get_dashboard_stats())
