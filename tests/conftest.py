"""
Pytest configuration and fixtures.
Each test gets its own SQLite file so tests never share state.
"""

import os
import sys

import pytest

# Make the project root importable when running pytest from anywhere
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

os.environ['FLASK_ENV'] = 'test'


@pytest.fixture
def db_path(tmp_path):
    """Path of the isolated test database."""
    return str(tmp_path / 'test_wheelchair_rental.db')


@pytest.fixture
def app(db_path):
    """Create test application with a fresh, empty database."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['DATABASE_PATH'] = db_path

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_unit(app):
    """Factory creating units with sensible defaults."""
    from models.unit import create_unit

    def _make_unit(**overrides):
        data = {
            'model': 'Zinger',
            'brand': 'Zinger',
            'year': 2021,
            'motor': '250W',
            'wheel_size': '10"',
        }
        data.update(overrides)
        return create_unit(**data)

    return _make_unit


@pytest.fixture
def make_client(app):
    """Factory creating clients with a unique DNI per call."""
    from models.client import create_client

    counter = {'n': 0}

    def _make_client(**overrides):
        counter['n'] += 1
        data = {
            'first_name': 'Ana',
            'last_name': 'Garcia',
            'dni': f'DNI{counter["n"]:05d}',
            'address': 'Calle Mayor 1',
            'phone': '+34612345678',
            'email': f'client{counter["n"]}@example.com',
            'city': 'Madrid',
            'country': 'Spain',
        }
        data.update(overrides)
        return create_client(**data)

    return _make_client
