"""
Tests for the reservation lifecycle.
"""

import threading

import pytest

from models.reservation import (
    create_reservation, update_reservation, cancel_reservation, complete_reservation,
    delete_reservation, get_reservation_by_id, get_reservation_with_details,
    get_all_reservations, get_all_reservations_with_details, get_active_reservations,
    get_unit_reservations, get_client_reservations, count_unit_reservations,
    count_client_reservations
)
from models.unit import get_unit_by_id
from utils.exceptions import (
    ConflictError, InvalidRangeError, NotFoundError, ValidationError
)


class TestCreateReservation:
    """Creation preconditions and effects."""

    def test_create(self, make_unit, make_client):
        unit = make_unit()
        client = make_client()
        reservation = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05',
                                         notes='Deliver to hotel')
        assert reservation['status'] == 'active'
        assert reservation['start_date'] == '2025-06-01'
        assert reservation['end_date'] == '2025-06-05'
        assert reservation['notes'] == 'Deliver to hotel'
        assert get_unit_by_id(unit['id'])['rental_count'] == 1

    def test_missing_client_checked_first(self, app):
        # Unit is also missing and the range is inverted, client wins
        with pytest.raises(NotFoundError) as exc_info:
            create_reservation(1, 1, '2025-06-05', '2025-06-01')
        assert exc_info.value.entity == 'client'

    def test_missing_unit_checked_before_range(self, make_client):
        client = make_client()
        with pytest.raises(NotFoundError) as exc_info:
            create_reservation(client['id'], 99, '2025-06-05', '2025-06-01')
        assert exc_info.value.entity == 'unit'

    def test_range_checked_before_availability(self, make_unit, make_client):
        unit = make_unit()
        client = make_client()
        create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-10')
        with pytest.raises(InvalidRangeError):
            create_reservation(client['id'], unit['id'], '2025-06-05', '2025-06-05')

    def test_double_booking_is_rejected(self, make_unit, make_client):
        unit = make_unit()
        first = create_reservation(make_client()['id'], unit['id'], '2025-06-01', '2025-06-05')

        with pytest.raises(ConflictError) as exc_info:
            create_reservation(make_client()['id'], unit['id'], '2025-06-05', '2025-06-08')

        conflicts = exc_info.value.details['conflicts']
        assert [c['reservation_id'] for c in conflicts] == [first['id']]
        assert get_unit_by_id(unit['id'])['rental_count'] == 1
        assert len(get_all_reservations()) == 1

    def test_failed_write_leaves_nothing_behind(self, make_unit, make_client, monkeypatch):
        import models.reservation_crud as reservation_crud

        def failing_increment(cursor, unit_id):
            raise RuntimeError('disk full')

        monkeypatch.setattr(reservation_crud, 'increment_rental_count', failing_increment)
        unit = make_unit()
        client = make_client()

        with pytest.raises(RuntimeError):
            create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')

        assert get_all_reservations() == []
        assert get_unit_by_id(unit['id'])['rental_count'] == 0


class TestRentalCounter:
    """rental_count only ever grows, and only on creation."""

    def test_counter_ignores_updates_and_deletes(self, make_unit, make_client):
        unit = make_unit()
        other = make_unit()
        client = make_client()

        first = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')
        second = create_reservation(client['id'], unit['id'], '2025-07-01', '2025-07-05')
        assert get_unit_by_id(unit['id'])['rental_count'] == 2

        update_reservation(first['id'], unit_id=other['id'])
        cancel_reservation(second['id'])
        delete_reservation(first['id'])

        assert get_unit_by_id(unit['id'])['rental_count'] == 2
        assert get_unit_by_id(other['id'])['rental_count'] == 0


class TestUpdateReservation:
    """Patching dates, unit, status and notes."""

    def test_notes_only_update_does_not_conflict_with_itself(self, make_unit, make_client):
        unit = make_unit()
        reservation = create_reservation(make_client()['id'], unit['id'],
                                         '2025-06-01', '2025-06-05')
        updated = update_reservation(reservation['id'], notes='Needs charger')
        assert updated['notes'] == 'Needs charger'
        assert updated['start_date'] == '2025-06-01'

    def test_extend_own_range(self, make_unit, make_client):
        unit = make_unit()
        reservation = create_reservation(make_client()['id'], unit['id'],
                                         '2025-06-01', '2025-06-05')
        updated = update_reservation(reservation['id'], end_date='2025-06-09')
        assert updated['end_date'] == '2025-06-09'

    def test_move_onto_booked_dates(self, make_unit, make_client):
        unit = make_unit()
        client = make_client()
        create_reservation(client['id'], unit['id'], '2025-06-10', '2025-06-15')
        movable = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')

        with pytest.raises(ConflictError):
            update_reservation(movable['id'], end_date='2025-06-10')
        assert get_reservation_by_id(movable['id'])['end_date'] == '2025-06-05'

    def test_move_to_booked_unit(self, make_unit, make_client):
        busy = make_unit()
        free = make_unit()
        client = make_client()
        create_reservation(client['id'], busy['id'], '2025-06-01', '2025-06-05')
        reservation = create_reservation(client['id'], free['id'], '2025-06-03', '2025-06-04')

        with pytest.raises(ConflictError):
            update_reservation(reservation['id'], unit_id=busy['id'])

    def test_move_to_missing_unit(self, make_unit, make_client):
        reservation = create_reservation(make_client()['id'], make_unit()['id'],
                                         '2025-06-01', '2025-06-05')
        with pytest.raises(NotFoundError):
            update_reservation(reservation['id'], unit_id=999)

    def test_patch_producing_inverted_range(self, make_unit, make_client):
        reservation = create_reservation(make_client()['id'], make_unit()['id'],
                                         '2025-06-01', '2025-06-05')
        with pytest.raises(InvalidRangeError):
            update_reservation(reservation['id'], start_date='2025-06-05')

    def test_update_missing_reservation(self, app):
        with pytest.raises(NotFoundError):
            update_reservation(123, notes='x')

    def test_unknown_fields_are_ignored(self, make_unit, make_client):
        client = make_client()
        reservation = create_reservation(client['id'], make_unit()['id'],
                                         '2025-06-01', '2025-06-05')
        updated = update_reservation(reservation['id'], client_id=999, notes='ok')
        assert updated['client_id'] == client['id']


class TestStatusTransitions:
    """active may become completed or cancelled, both of which are final."""

    def test_cancel_frees_the_unit(self, make_unit, make_client):
        unit = make_unit()
        client = make_client()
        reservation = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')

        cancelled = cancel_reservation(reservation['id'])
        assert cancelled['status'] == 'cancelled'

        again = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')
        assert again['status'] == 'active'

    def test_complete(self, make_unit, make_client):
        reservation = create_reservation(make_client()['id'], make_unit()['id'],
                                         '2025-06-01', '2025-06-05')
        assert complete_reservation(reservation['id'])['status'] == 'completed'

    def test_terminal_states_are_final(self, make_unit, make_client):
        reservation = create_reservation(make_client()['id'], make_unit()['id'],
                                         '2025-06-01', '2025-06-05')
        cancel_reservation(reservation['id'])

        with pytest.raises(ValidationError):
            update_reservation(reservation['id'], status='active')
        with pytest.raises(ValidationError):
            complete_reservation(reservation['id'])

    def test_editing_dates_of_cancelled_reservation_skips_availability(
            self, make_unit, make_client):
        unit = make_unit()
        client = make_client()
        old = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')
        cancel_reservation(old['id'])
        create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')

        updated = update_reservation(old['id'], end_date='2025-06-04')
        assert updated['end_date'] == '2025-06-04'
        assert updated['status'] == 'cancelled'

    def test_cancel_missing(self, app):
        with pytest.raises(NotFoundError):
            cancel_reservation(42)


class TestQueries:
    """Listing and filtering."""

    def test_filters(self, make_unit, make_client):
        u1, u2 = make_unit(), make_unit()
        c1, c2 = make_client(), make_client()
        r1 = create_reservation(c1['id'], u1['id'], '2025-06-01', '2025-06-05')
        r2 = create_reservation(c2['id'], u2['id'], '2025-06-01', '2025-06-05')
        cancel_reservation(r2['id'])

        assert [r['id'] for r in get_all_reservations(status='active')] == [r1['id']]
        assert [r['id'] for r in get_all_reservations(unit_id=u2['id'])] == [r2['id']]
        assert [r['id'] for r in get_client_reservations(c1['id'])] == [r1['id']]
        assert [r['id'] for r in get_unit_reservations(u1['id'])] == [r1['id']]
        assert count_unit_reservations(u2['id']) == 1
        assert count_client_reservations(c1['id']) == 1

    def test_details(self, make_unit, make_client):
        unit = make_unit(model='Fold')
        client = make_client(first_name='Lucia')
        reservation = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')

        detailed = get_reservation_with_details(reservation['id'])
        assert detailed['client']['first_name'] == 'Lucia'
        assert detailed['unit']['model'] == 'Fold'
        assert get_reservation_with_details(999) is None

        listed = get_all_reservations_with_details()
        assert listed[0]['unit']['id'] == unit['id']

    def test_active_excludes_expired(self, make_unit, make_client):
        unit = make_unit()
        client = make_client()
        past = create_reservation(client['id'], unit['id'], '2025-06-01', '2025-06-05')
        current = create_reservation(client['id'], unit['id'], '2025-06-10', '2025-06-20')

        active_ids = [r['id'] for r in get_active_reservations(today='2025-06-12')]
        assert active_ids == [current['id']]
        assert past['id'] not in active_ids

    def test_delete(self, make_unit, make_client):
        reservation = create_reservation(make_client()['id'], make_unit()['id'],
                                         '2025-06-01', '2025-06-05')
        assert delete_reservation(reservation['id']) is True
        assert get_reservation_by_id(reservation['id']) is None
        assert delete_reservation(reservation['id']) is False


def test_rental_scenario(make_unit, make_client):
    """One client, one unit: book, get rejected, cancel, rebook."""
    u1 = make_unit()
    c1 = make_client()

    first = create_reservation(c1['id'], u1['id'], '2025-06-01', '2025-06-05')
    with pytest.raises(ConflictError):
        create_reservation(c1['id'], u1['id'], '2025-06-03', '2025-06-07')

    cancel_reservation(first['id'])
    second = create_reservation(c1['id'], u1['id'], '2025-06-03', '2025-06-07')

    assert second['id'] != first['id']
    assert get_unit_by_id(u1['id'])['rental_count'] == 2
    assert [r['id'] for r in get_all_reservations(status='active')] == [second['id']]


def test_concurrent_bookings_for_same_unit(app, make_unit, make_client):
    """Only one of many simultaneous requests for the same range can win."""
    unit = make_unit()
    clients = [make_client() for _ in range(6)]
    results = []
    lock = threading.Lock()
    barrier = threading.Barrier(len(clients))

    def book(client_id):
        with app.app_context():
            barrier.wait()
            try:
                create_reservation(client_id, unit['id'], '2025-06-01', '2025-06-05')
                outcome = 'ok'
            except ConflictError:
                outcome = 'conflict'
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=book, args=(c['id'],)) for c in clients]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count('ok') == 1
    assert results.count('conflict') == len(clients) - 1
    assert len(get_all_reservations()) == 1
    assert get_unit_by_id(unit['id'])['rental_count'] == 1
