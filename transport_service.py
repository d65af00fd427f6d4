"""
Resilient service facade for the Bus Booking client.

One method per domain action. Each fallback operation first asks the backend
through the ApiClient; when the result is an ApiError the session is seeded
(idempotently) and the DemoDataStore answers instead, so callers never see
backend unavailability. Administrative calls without a sensible demo answer
raise RemoteServiceError instead.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from api_client import ApiClient, ApiResult
from demo_data import DemoDataStore
from errors import AuthenticationError, RemoteServiceError, ValidationError
from models import ApiResponse

logger = logging.getLogger(__name__)


def _require_id(value: Any, name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{name} is required")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if number < 1:
        raise ValidationError(f"{name} must be positive, got {number}")
    return number


def _require_text(value: Any, name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value).strip()


class TransportService:
    """Facade over the remote API with transparent demo fallback."""

    def __init__(self, client: ApiClient, demo_store: DemoDataStore):
        self.client = client
        self.demo_store = demo_store
        self.fallback_events: List[str] = []
        self.served_demo_data = False

    # ------------------------------------------------------------------------
    # Fallback plumbing
    # ------------------------------------------------------------------------

    def _with_fallback(self, result: ApiResult, demo_call: Callable[[], Any],
                       fallback_message: str) -> Any:
        if isinstance(result, ApiResponse):
            return result.data

        logger.warning(f"{fallback_message}: {result.error} - {result.message}")
        self.fallback_events.append(fallback_message)
        self.served_demo_data = True
        self.demo_store.initialize()
        return demo_call()

    def _unwrap(self, result: ApiResult, operation: str) -> Any:
        """Return the body of a call that has no demo fallback."""
        if isinstance(result, ApiResponse):
            return result.data
        logger.error(f"{operation} failed: {result.error} - {result.message}")
        if result.error == 'unauthorized':
            raise AuthenticationError(operation, result)
        raise RemoteServiceError(operation, result)

    @property
    def in_demo_mode(self) -> bool:
        """
        True once any call has been answered from demo data.

        Stays set after the notice has been consumed.
        """
        return self.served_demo_data

    def consume_fallback_notice(self) -> Optional[str]:
        """
        Return a one-time demo mode notice for the presentation layer.

        The notice is produced once per batch of fallbacks; the event list is
        cleared afterwards.
        """
        if not self.fallback_events:
            return None
        count = len(self.fallback_events)
        self.fallback_events.clear()
        return f"Backend unavailable, showing demo data ({count} request{'s' if count != 1 else ''})"

    # ------------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------------

    def search_routes(self, source_id: int, destination_id: int, date: str) -> List[Dict]:
        source_id = _require_id(source_id, 'source_id')
        destination_id = _require_id(destination_id, 'destination_id')
        date = _require_text(date, 'date')

        return self._with_fallback(
            self.client.post('/bus/routes/search/', json={
                'source_id': source_id,
                'destination_id': destination_id,
                'date': date,
            }),
            lambda: self.demo_store.search_routes(source_id, destination_id, date),
            "Route search failed, using demo routes",
        )

    def get_all_routes(self) -> List[Dict]:
        return self._with_fallback(
            self.client.get('/bus/routes/'),
            self.demo_store.get_all_routes,
            "Failed to fetch routes, using demo routes",
        )

    def get_route_details(self, route_id: int) -> Optional[Dict]:
        route_id = _require_id(route_id, 'route_id')
        return self._with_fallback(
            self.client.get(f'/bus/routes/{route_id}/'),
            lambda: self.demo_store.get_route_details(route_id),
            "Failed to fetch route details, using demo data",
        )

    def get_route_stop_points(self, route_id: int) -> List[Dict]:
        route_id = _require_id(route_id, 'route_id')
        return self._with_fallback(
            self.client.get(f'/bus/routes/{route_id}/stops/'),
            lambda: self.demo_store.get_route_stop_points(route_id),
            "Failed to fetch stop points, using demo data",
        )

    def get_cities(self) -> List[Dict]:
        return self._with_fallback(
            self.client.get('/cities/'),
            self.demo_store.get_cities,
            "Failed to fetch cities, using demo cities",
        )

    # ------------------------------------------------------------------------
    # Seats
    # ------------------------------------------------------------------------

    def get_route_seats(self, route_id: int) -> List[Dict]:
        route_id = _require_id(route_id, 'route_id')
        return self._with_fallback(
            self.client.get('/seats/seats/route_seats/', params={'route_id': route_id}),
            lambda: self.demo_store.get_route_seats(route_id),
            "Failed to fetch route seats, using demo seats",
        )

    def get_available_seats(self, route_id: int) -> List[Dict]:
        route_id = _require_id(route_id, 'route_id')
        return self._with_fallback(
            self.client.get('/seats/seats/available/', params={'route_id': route_id}),
            lambda: self.demo_store.get_available_seats(route_id),
            "Failed to fetch available seats, using demo seats",
        )

    def get_booked_seats(self, route_id: int) -> List[Dict]:
        route_id = _require_id(route_id, 'route_id')
        return self._with_fallback(
            self.client.get('/seats/seats/booked/', params={'route_id': route_id}),
            lambda: self.demo_store.get_booked_seats(route_id),
            "Failed to fetch booked seats, using demo data",
        )

    # ------------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------------

    def create_booking(self, booking_data: Dict) -> Dict:
        if not isinstance(booking_data, dict):
            raise ValidationError("booking data must be a mapping")
        route_id = _require_id(booking_data.get('route_id', booking_data.get('routeId')), 'route_id')
        if not booking_data.get('seats'):
            raise ValidationError("at least one seat is required")
        booking_data = {k: v for k, v in booking_data.items() if k != 'routeId'}
        booking_data['route_id'] = route_id

        return self._with_fallback(
            self.client.post('/booking/bookings/', json=booking_data),
            lambda: self.demo_store.create_booking(booking_data),
            "Failed to create booking, using demo booking",
        )

    def get_bookings(self) -> List[Dict]:
        return self._with_fallback(
            self.client.get('/booking/bookings/'),
            self.demo_store.get_bookings,
            "Failed to fetch bookings, using demo bookings",
        )

    def get_booking_details(self, booking_id: str) -> Optional[Dict]:
        booking_id = _require_text(booking_id, 'booking_id')
        return self._with_fallback(
            self.client.get(f'/booking/bookings/{booking_id}/'),
            lambda: self.demo_store.get_booking_details(booking_id),
            "Failed to fetch booking details, using demo data",
        )

    def cancel_booking(self, booking_id: str) -> Dict:
        booking_id = _require_text(booking_id, 'booking_id')
        return self._with_fallback(
            self.client.post(f'/booking/bookings/{booking_id}/cancel/'),
            lambda: self.demo_store.cancel_booking(booking_id),
            "Failed to cancel booking, using demo cancellation",
        )

    # ------------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------------

    def create_payment(self, payment_data: Dict) -> Dict:
        if not isinstance(payment_data, dict):
            raise ValidationError("payment data must be a mapping")
        return self._with_fallback(
            self.client.post('/payments/', json=payment_data),
            lambda: self.demo_store.create_payment(payment_data),
            "Failed to create payment, using demo payment",
        )

    def verify_payment(self, payment_data: Dict) -> Dict:
        if not isinstance(payment_data, dict):
            raise ValidationError("payment data must be a mapping")
        return self._with_fallback(
            self.client.post('/payments/verify/', json=payment_data),
            lambda: self.demo_store.verify_payment(payment_data),
            "Failed to verify payment, using demo verification",
        )

    def complete_payment(self, booking_id: str) -> Any:
        booking_id = _require_text(booking_id, 'booking_id')
        return self._unwrap(
            self.client.post(f'/booking/bookings/{booking_id}/complete_payment/'),
            'complete_payment',
        )

    # ------------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------------

    def get_user_profile(self) -> Dict:
        return self._with_fallback(
            self.client.get('/users/profile/'),
            self.demo_store.get_user_profile,
            "Failed to fetch user profile, using demo profile",
        )

    def update_user_profile(self, user_data: Dict) -> Dict:
        if not isinstance(user_data, dict):
            raise ValidationError("profile data must be a mapping")
        return self._with_fallback(
            self.client.put('/users/profile/', json=user_data),
            lambda: self.demo_store.update_user_profile(user_data),
            "Failed to update user profile, using demo update",
        )

    def delete_account(self) -> Any:
        return self._unwrap(self.client.delete('/users/delete/'), 'delete_account')

    # ------------------------------------------------------------------------
    # Authentication endpoints (raw, no fallback)
    # ------------------------------------------------------------------------

    def login_request(self, phone_number: str, password: str) -> Dict:
        return self._unwrap(
            self.client.post('/users/token/', json={'phone_number': phone_number, 'password': password}),
            'login',
        )

    def register_request(self, phone_number: str, password: str) -> Dict:
        return self._unwrap(
            self.client.post('/users/register/', json={'phone_number': phone_number, 'password': password}),
            'register',
        )

    def verify_otp(self, phone_number: str, otp: str) -> Dict:
        return self._unwrap(
            self.client.post('/users/verify-otp/', json={'phone_number': phone_number, 'otp': otp}),
            'verify_otp',
        )

    # ------------------------------------------------------------------------
    # Feedback (no fallback)
    # ------------------------------------------------------------------------

    def create_feedback(self, feedback_data: Dict) -> Any:
        return self._unwrap(self.client.post('/booking/feedbacks/', json=feedback_data), 'create_feedback')

    def get_feedback_statistics(self) -> Any:
        return self._unwrap(self.client.get('/booking/feedbacks/statistics/'), 'get_feedback_statistics')

    # ------------------------------------------------------------------------
    # Tracking
    # ------------------------------------------------------------------------

    def get_bus_location(self, booking_id: str) -> Optional[Dict]:
        booking_id = _require_text(booking_id, 'booking_id')
        return self._with_fallback(
            self.client.get(f'/tracking/bus/{booking_id}/'),
            lambda: self.demo_store.get_bus_location(booking_id),
            "Failed to fetch bus location, using demo location",
        )

    def get_active_locations(self) -> Any:
        return self._unwrap(
            self.client.get('/gps_tracking/locations/active_locations/'),
            'get_active_locations',
        )

    def get_bus_history(self, bus_id: int) -> Any:
        bus_id = _require_id(bus_id, 'bus_id')
        return self._unwrap(
            self.client.get('/gps_tracking/locations/bus_history/', params={'bus_id': bus_id}),
            'get_bus_history',
        )
