"""
Unit tests for transport_service.py.

Tests cover:
- Live results passed straight through
- Transparent demo fallback for every fallback operation
- Input validation that never falls back
- Operations without fallback raising RemoteServiceError
- The one-time demo mode notice
"""

import pytest

from api_client import ApiClient
from conftest import make_response
from errors import AuthenticationError, RemoteServiceError, ValidationError
from transport_service import TransportService


@pytest.fixture
def live_service(session_store, navigator, http, demo_store):
    client = ApiClient('http://backend.test/api', session_store, navigator=navigator, http=http)
    return TransportService(client, demo_store)


BOOKING_REQUEST = {
    'route_id': 1,
    'from': 'Addis Ababa',
    'to': 'Bahir Dar',
    'date': '2024-01-15',
    'seats': ['A1', 'A2'],
    'passengers': [{'name': 'Abebe Kebede', 'phone': '+251911234567', 'seat_number': 'A1'}],
    'totalPrice': 1700,
}


class TestLiveResults:
    """Backend answers are returned unchanged."""

    def test_search_routes_uses_backend(self, live_service, http):
        http.request.return_value = make_response(200, [{'id': 77}])

        assert live_service.search_routes(1, 2, '2024-01-15') == [{'id': 77}]
        assert live_service.in_demo_mode is False

        args, kwargs = http.request.call_args
        assert args == ('POST', 'http://backend.test/api/bus/routes/search/')
        assert kwargs['json'] == {'source_id': 1, 'destination_id': 2, 'date': '2024-01-15'}

    def test_seat_queries_pass_route_id(self, live_service, http):
        http.request.return_value = make_response(200, [])

        live_service.get_available_seats(5)

        args, kwargs = http.request.call_args
        assert args[1] == 'http://backend.test/api/seats/seats/available/'
        assert kwargs['params'] == {'route_id': 5}

    def test_live_success_does_not_seed_session(self, live_service, http, session_store):
        http.request.return_value = make_response(200, [])
        live_service.get_bookings()
        assert session_store.get_bookings() is None


class TestFallback:
    """Every fallback operation resolves when the backend is down."""

    def test_search_routes_falls_back(self, offline_service):
        routes = offline_service.search_routes(1, 2, '2024-01-15')
        assert [r['id'] for r in routes] == [1, 2]

    def test_search_without_match_returns_empty(self, offline_service):
        assert offline_service.search_routes(1, 2, '2030-01-01') == []

    def test_fallback_shapes(self, offline_service):
        assert len(offline_service.get_all_routes()) == 8
        assert offline_service.get_route_details(1)['id'] == 1
        assert len(offline_service.get_route_stop_points(1)) == 3
        assert len(offline_service.get_cities()) == 15
        assert len(offline_service.get_route_seats(1)) == 45
        assert len(offline_service.get_available_seats(1)) == 12
        assert len(offline_service.get_booked_seats(1)) == 33
        assert isinstance(offline_service.get_bookings(), list)
        assert offline_service.get_booking_details('BK001')['id'] == 'BK001'
        assert offline_service.cancel_booking('BK002') == {'success': True}
        assert offline_service.get_user_profile()['id'] == 1
        assert offline_service.update_user_profile({'address': 'Piassa'})['address'] == 'Piassa'
        assert offline_service.get_bus_location('BK001')['bus_number'] == 'ET-1234'
        assert offline_service.create_payment({'amount': 850})['status'] == 'success'
        assert offline_service.verify_payment({'transaction_id': 'TXN1'})['verified'] is True

    def test_fallback_seeds_session(self, offline_service, session_store):
        offline_service.get_cities()
        assert [b['id'] for b in session_store.get_bookings()] == ['BK001', 'BK002', 'BK003', 'BK004']

    def test_http_error_also_falls_back(self, live_service, http):
        http.request.return_value = make_response(503)
        assert len(live_service.get_cities()) == 15

    def test_created_booking_round_trip(self, offline_service):
        booking = offline_service.create_booking(BOOKING_REQUEST)

        # The session is seeded with the four demo bookings before the fallback runs
        assert booking['id'] == 'BK005'
        assert booking['status'] == 'confirmed'
        bookings = offline_service.get_bookings()
        assert bookings[-1] == booking
        assert offline_service.get_booking_details('BK005') == booking

    def test_sequential_booking_ids(self, offline_service):
        first = offline_service.create_booking(BOOKING_REQUEST)
        second = offline_service.create_booking(dict(BOOKING_REQUEST, seats=['A3']))
        assert (first['id'], second['id']) == ('BK005', 'BK006')

    def test_cancel_created_booking(self, offline_service):
        booking = offline_service.create_booking(BOOKING_REQUEST)

        offline_service.cancel_booking(booking['id'])

        bookings = {b['id']: b for b in offline_service.get_bookings()}
        assert bookings[booking['id']] == dict(booking, status='cancelled')
        assert bookings['BK001']['status'] == 'confirmed'

    def test_fallback_notice_reported_once(self, offline_service):
        offline_service.get_cities()
        offline_service.get_all_routes()

        assert offline_service.in_demo_mode is True
        notice = offline_service.consume_fallback_notice()
        assert notice == "Backend unavailable, showing demo data (2 requests)"
        assert offline_service.consume_fallback_notice() is None
        assert offline_service.in_demo_mode is True


class TestValidation:
    """Invalid input is rejected before any call is made."""

    @pytest.mark.parametrize('source,destination,date', [
        (None, 2, '2024-01-15'),
        (1, None, '2024-01-15'),
        (1, 2, ''),
        ('abc', 2, '2024-01-15'),
        (0, 2, '2024-01-15'),
    ])
    def test_search_routes_rejects_bad_input(self, offline_service, offline_http, source, destination, date):
        with pytest.raises(ValidationError):
            offline_service.search_routes(source, destination, date)
        offline_http.request.assert_not_called()

    def test_missing_route_id(self, offline_service):
        with pytest.raises(ValidationError):
            offline_service.get_route_seats(None)

    def test_create_booking_requires_route_and_seats(self, offline_service):
        with pytest.raises(ValidationError):
            offline_service.create_booking({'seats': ['A1']})
        with pytest.raises(ValidationError):
            offline_service.create_booking({'route_id': 1, 'seats': []})
        with pytest.raises(ValidationError):
            offline_service.create_booking(None)

    def test_create_booking_accepts_camel_case_route_id(self, offline_service):
        booking = offline_service.create_booking({'routeId': 1, 'seats': ['A1', 'A2']})
        assert booking['route_id'] == 1

    def test_create_booking_normalizes_string_route_id(self, offline_service):
        booking = offline_service.create_booking({'routeId': '1', 'seats': ['A1']})

        assert booking['route_id'] == 1
        assert booking['from'] == 'Addis Ababa'
        assert booking['to'] == 'Bahir Dar'
        assert booking['bus_name'] == 'Sky Bus Premium'
        assert offline_service.get_route_details(1)['available_seats'] == 11

    def test_create_booking_sends_normalized_route_id(self, live_service, http):
        http.request.return_value = make_response(201, {'id': 'B-1'})

        live_service.create_booking({'routeId': '2', 'seats': ['A1']})

        assert http.request.call_args.kwargs['json'] == {'route_id': 2, 'seats': ['A1']}

    def test_missing_booking_id(self, offline_service):
        with pytest.raises(ValidationError):
            offline_service.cancel_booking('  ')


class TestNoFallbackOperations:
    """Administrative calls propagate backend failures."""

    @pytest.mark.parametrize('operation,args', [
        ('delete_account', ()),
        ('get_active_locations', ()),
        ('get_bus_history', (3,)),
        ('create_feedback', ({'rating': 5},)),
        ('get_feedback_statistics', ()),
        ('complete_payment', ('BK001',)),
    ])
    def test_raises_when_backend_down(self, offline_service, operation, args):
        with pytest.raises(RemoteServiceError) as exc_info:
            getattr(offline_service, operation)(*args)
        assert exc_info.value.api_error.error == 'network'
        assert offline_service.in_demo_mode is False

    def test_unauthorized_raises_authentication_error(self, live_service, http):
        http.request.return_value = make_response(401)

        with pytest.raises(AuthenticationError) as exc_info:
            live_service.delete_account()
        assert exc_info.value.status_code == 401

    def test_success_returns_body(self, live_service, http):
        http.request.return_value = make_response(200, {'average_rating': 4.5})
        assert live_service.get_feedback_statistics() == {'average_rating': 4.5}
