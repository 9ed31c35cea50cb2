"""
Wheelchair Rental - Reservation Management Service
Flask application factory and initialization
"""

import os
import sqlite3
import click
import logging
from flask import Flask, g
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import database functions
from database import close_db, init_db

from utils.api_response import api_error, api_exception
from utils.exceptions import RentalError
from utils.messages import get_message


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.api import api_bp

    app.register_blueprint(api_bp, url_prefix=app.config.get('API_PREFIX', '/api'))


def _rollback():
    db = g.get('db')
    if db is not None and db.in_transaction:
        db.rollback()


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(RentalError)
    def rental_error(error):
        """Handle domain errors raised by the models."""
        if error.status_code >= 500:
            app.logger.warning(f'{error.error_type}: {error.message}')
        return api_exception(error)

    @app.errorhandler(sqlite3.Error)
    def store_error(error):
        """Handle store failures that escaped the transaction helper."""
        _rollback()
        app.logger.error(f'Store error: {error}')
        return api_error(
            get_message('store_unavailable'), 503,
            error_type='store_error', retryable=True
        )

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(get_message('route_not_found'), 404, error_type='not_found')

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error(get_message('method_not_allowed'), 405, error_type='method_not_allowed')

    @app.errorhandler(HTTPException)
    def http_error(error):
        """Handle remaining HTTP errors (413, 400 from werkzeug...)."""
        return api_error(error.description, error.code, error_type='http_error')

    @app.errorhandler(Exception)
    def internal_error(error):
        """Handle unexpected errors."""
        _rollback()
        app.logger.exception(f'Unhandled error: {error}')
        return api_error(get_message('internal_error'), 500, error_type='internal_error')


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('stats')
    def stats_command():
        """Print dashboard statistics as of today."""
        from models.stats import get_dashboard_stats

        with app.app_context():
            stats = get_dashboard_stats()
        click.echo(f"Units available: {stats['available_units']}/{stats['total_units']}")
        click.echo(f"Active reservations: {stats['active_reservations']}")
        click.echo(f"Clients: {stats['total_clients']}")


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        log_dir = app.config.get('LOG_DIR', 'logs')
        if not os.path.exists(log_dir):
            os.mkdir(log_dir)

        file_handler = logging.FileHandler(os.path.join(log_dir, 'wheelchair_rental.log'))
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Wheelchair Rental startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
