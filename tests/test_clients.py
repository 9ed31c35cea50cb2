"""
Tests for client model functions.
"""

import pytest

from models.client import (
    get_all_clients, get_client_by_id, get_client_by_dni, count_clients,
    update_client, delete_client
)
from models.reservation import create_reservation
from utils.datetime_helpers import get_today
from utils.exceptions import ConflictError, NotFoundError


class TestClientModel:
    """Test client registry operations."""

    def test_create_client_defaults_register_date(self, make_client):
        client = make_client()
        assert client['id'] > 0
        assert client['register_date'] == get_today().isoformat()

    def test_create_client_with_register_date(self, make_client):
        client = make_client(register_date='2024-03-01')
        assert client['register_date'] == '2024-03-01'

    def test_get_client_by_dni(self, make_client):
        client = make_client(dni='X1234567L')
        assert get_client_by_dni('X1234567L')['id'] == client['id']
        assert get_client_by_dni('nope') is None

    def test_duplicate_dni_is_rejected(self, make_client):
        make_client(dni='11111111H')
        with pytest.raises(ConflictError):
            make_client(dni='11111111H')
        assert count_clients() == 1

    def test_list_includes_reservation_count(self, make_client, make_unit):
        client = make_client()
        unit = make_unit()
        create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-03')

        clients = get_all_clients()
        assert len(clients) == 1
        assert clients[0]['reservation_count'] == 1

    def test_update_client(self, make_client):
        client = make_client()
        updated = update_client(client['id'], city='Valencia', phone='699000111')
        assert updated['city'] == 'Valencia'
        assert updated['phone'] == '699000111'

    def test_register_date_is_immutable(self, make_client):
        client = make_client(register_date='2024-03-01')
        updated = update_client(client['id'], register_date='2020-01-01')
        assert updated['register_date'] == '2024-03-01'

    def test_update_to_taken_dni(self, make_client):
        make_client(dni='22222222J')
        other = make_client(dni='33333333P')
        with pytest.raises(ConflictError):
            update_client(other['id'], dni='22222222J')

    def test_update_missing_client(self, app):
        with pytest.raises(NotFoundError):
            update_client(404, city='Nowhere')

    def test_delete_client(self, make_client):
        client = make_client()
        assert delete_client(client['id']) is True
        assert get_client_by_id(client['id']) is None
        assert delete_client(client['id']) is False

    def test_delete_client_with_reservations_is_rejected(self, make_client, make_unit):
        client = make_client()
        unit = make_unit()
        create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-03')

        with pytest.raises(ConflictError):
            delete_client(client['id'])
        assert get_client_by_id(client['id']) is not None
