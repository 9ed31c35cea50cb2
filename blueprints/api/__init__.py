"""
API blueprint package.
Split into smaller modules by entity for maintainability.
"""

from flask import Blueprint

# Create the API blueprint
api_bp = Blueprint('api', __name__)

# Import and register routes from submodules
from blueprints.api import units
from blueprints.api import clients
from blueprints.api import reservations
from blueprints.api import availability

# Register all route functions on the blueprint
units.register_routes(api_bp)
clients.register_routes(api_bp)
reservations.register_routes(api_bp)
availability.register_routes(api_bp)
