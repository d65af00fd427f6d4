"""
Demo fallback data for the Bus Booking client.

Static reference data (cities, routes, a demo user, demo bookings, bus
positions, stop points) and the DemoDataStore that answers every fallback
operation when the backend is unreachable. Bookings and the synthetic user
identity are read from and written to the SessionStore so they survive
restarts; routes and cities live in the store instance only.

Usage:
    from demo_data import DemoDataStore
    from session_store import SessionStore

    store = DemoDataStore(SessionStore())
    routes = store.search_routes(1, 2, '2024-01-15')
"""

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from models import (
    Booking,
    BusLocation,
    City,
    Passenger,
    Payment,
    PaymentVerification,
    Route,
    Seat,
    StopPoint,
    User,
)
from session_store import DEMO_USER_KEY, USER_BOOKINGS_KEY, SessionStore

logger = logging.getLogger(__name__)

SEATS_PER_ROW = 4

# ============================================================================
# Seed Data
# ============================================================================

DEMO_CITIES: List[Dict] = [
    {'id': 1, 'name': 'Addis Ababa', 'region': 'Addis Ababa'},
    {'id': 2, 'name': 'Bahir Dar', 'region': 'Amhara'},
    {'id': 3, 'name': 'Gondar', 'region': 'Amhara'},
    {'id': 4, 'name': 'Mekelle', 'region': 'Tigray'},
    {'id': 5, 'name': 'Hawassa', 'region': 'Sidama'},
    {'id': 6, 'name': 'Dire Dawa', 'region': 'Dire Dawa'},
    {'id': 7, 'name': 'Jimma', 'region': 'Oromia'},
    {'id': 8, 'name': 'Dessie', 'region': 'Amhara'},
    {'id': 9, 'name': 'Jijiga', 'region': 'Somali'},
    {'id': 10, 'name': 'Shashamane', 'region': 'Oromia'},
    {'id': 11, 'name': 'Bishoftu', 'region': 'Oromia'},
    {'id': 12, 'name': 'Arba Minch', 'region': 'SNNPR'},
    {'id': 13, 'name': 'Hosaena', 'region': 'SNNPR'},
    {'id': 14, 'name': 'Harar', 'region': 'Harari'},
    {'id': 15, 'name': 'Dilla', 'region': 'SNNPR'},
]

DEMO_ROUTES: List[Dict] = [
    {
        'id': 1, 'bus_name': 'Sky Bus Premium', 'operator_name': 'Sky Bus',
        'source_name': 'Addis Ababa', 'destination_name': 'Bahir Dar',
        'departure_time': '06:00', 'arrival_time': '12:30', 'date': '2024-01-15',
        'price': '850', 'available_seats': 12, 'total_seats': 45, 'bus_type': 'Premium',
        'amenities': ['WiFi', 'AC', 'USB Charging', 'Refreshments'], 'rating': 4.8,
    },
    {
        'id': 2, 'bus_name': 'Selam Bus Express', 'operator_name': 'Selam Bus',
        'source_name': 'Addis Ababa', 'destination_name': 'Bahir Dar',
        'departure_time': '07:30', 'arrival_time': '14:00', 'date': '2024-01-15',
        'price': '750', 'available_seats': 8, 'total_seats': 50, 'bus_type': 'Standard',
        'amenities': ['AC', 'USB Charging'], 'rating': 4.5,
    },
    {
        'id': 3, 'bus_name': 'Ethio Bus Deluxe', 'operator_name': 'Ethio Bus',
        'source_name': 'Addis Ababa', 'destination_name': 'Gondar',
        'departure_time': '08:00', 'arrival_time': '16:30', 'date': '2024-01-15',
        'price': '950', 'available_seats': 15, 'total_seats': 40, 'bus_type': 'Deluxe',
        'amenities': ['WiFi', 'AC', 'USB Charging', 'Refreshments', 'Reclining Seats'],
        'rating': 4.9,
    },
    {
        'id': 4, 'bus_name': 'Abay Bus Standard', 'operator_name': 'Abay Bus',
        'source_name': 'Addis Ababa', 'destination_name': 'Mekelle',
        'departure_time': '06:30', 'arrival_time': '18:00', 'date': '2024-01-15',
        'price': '1200', 'available_seats': 6, 'total_seats': 55, 'bus_type': 'Standard',
        'amenities': ['AC'], 'rating': 4.3,
    },
    {
        'id': 5, 'bus_name': 'Tana Bus Premium', 'operator_name': 'Tana Bus',
        'source_name': 'Addis Ababa', 'destination_name': 'Hawassa',
        'departure_time': '09:00', 'arrival_time': '14:30', 'date': '2024-01-15',
        'price': '650', 'available_seats': 20, 'total_seats': 45, 'bus_type': 'Premium',
        'amenities': ['WiFi', 'AC', 'USB Charging', 'Refreshments'], 'rating': 4.6,
    },
    {
        'id': 6, 'bus_name': 'Rift Valley Express', 'operator_name': 'Rift Valley Bus',
        'source_name': 'Addis Ababa', 'destination_name': 'Jimma',
        'departure_time': '07:00', 'arrival_time': '12:00', 'date': '2024-01-15',
        'price': '550', 'available_seats': 18, 'total_seats': 50, 'bus_type': 'Standard',
        'amenities': ['AC', 'USB Charging'], 'rating': 4.4,
    },
    {
        'id': 7, 'bus_name': 'Blue Nile Deluxe', 'operator_name': 'Blue Nile Bus',
        'source_name': 'Bahir Dar', 'destination_name': 'Gondar',
        'departure_time': '08:30', 'arrival_time': '10:30', 'date': '2024-01-15',
        'price': '350', 'available_seats': 25, 'total_seats': 45, 'bus_type': 'Deluxe',
        'amenities': ['WiFi', 'AC', 'USB Charging', 'Refreshments'], 'rating': 4.7,
    },
    {
        'id': 8, 'bus_name': 'Axum Express', 'operator_name': 'Axum Bus',
        'source_name': 'Mekelle', 'destination_name': 'Addis Ababa',
        'departure_time': '06:00', 'arrival_time': '17:30', 'date': '2024-01-15',
        'price': '1100', 'available_seats': 10, 'total_seats': 55, 'bus_type': 'Standard',
        'amenities': ['AC', 'USB Charging'], 'rating': 4.2,
    },
]

DEMO_USER: Dict = {
    'id': 1,
    'first_name': 'Abebe',
    'last_name': 'Kebede',
    'phone_number': '+251911234567',
    'email': 'abebe.kebede@email.com',
    'address': 'Bole, Addis Ababa, Ethiopia',
    'date_of_birth': '1990-05-15',
    'created_at': '2023-01-15T10:30:00Z',
}

_ABEBE = {'name': 'Abebe Kebede', 'phone': '+251911234567', 'age': 34, 'gender': 'male'}
_TIGIST = {'name': 'Tigist Haile', 'phone': '+251922345678', 'age': 28, 'gender': 'female'}
_YOHANNES = {'name': 'Yohannes Tadesse', 'phone': '+251933456789', 'age': 45, 'gender': 'male'}

DEMO_BOOKINGS: List[Dict] = [
    {
        'id': 'BK001', 'route_id': 1, 'from': 'Addis Ababa', 'to': 'Bahir Dar',
        'date': '2024-01-15', 'seats': ['A1', 'A2'],
        'passengers': [
            dict(_ABEBE, id='P001', seat_number='A1'),
            dict(_TIGIST, id='P002', seat_number='A2'),
        ],
        'totalPrice': 1700, 'status': 'confirmed', 'bookingDate': '2024-01-10T14:30:00Z',
        'bus_name': 'Sky Bus Premium', 'operator_name': 'Sky Bus',
        'departure_time': '06:00', 'arrival_time': '12:30', 'payment_status': 'paid',
    },
    {
        'id': 'BK002', 'route_id': 3, 'from': 'Addis Ababa', 'to': 'Gondar',
        'date': '2024-01-20', 'seats': ['B3'],
        'passengers': [dict(_ABEBE, id='P003', seat_number='B3')],
        'totalPrice': 950, 'status': 'confirmed', 'bookingDate': '2024-01-12T09:15:00Z',
        'bus_name': 'Ethio Bus Deluxe', 'operator_name': 'Ethio Bus',
        'departure_time': '08:00', 'arrival_time': '16:30', 'payment_status': 'paid',
    },
    {
        'id': 'BK003', 'route_id': 5, 'from': 'Addis Ababa', 'to': 'Hawassa',
        'date': '2024-01-08', 'seats': ['C5', 'C6', 'C7'],
        'passengers': [
            dict(_ABEBE, id='P004', seat_number='C5'),
            dict(_TIGIST, id='P005', seat_number='C6'),
            dict(_YOHANNES, id='P006', seat_number='C7'),
        ],
        'totalPrice': 1950, 'status': 'completed', 'bookingDate': '2024-01-05T11:20:00Z',
        'bus_name': 'Tana Bus Premium', 'operator_name': 'Tana Bus',
        'departure_time': '09:00', 'arrival_time': '14:30', 'payment_status': 'paid',
    },
    {
        'id': 'BK004', 'route_id': 2, 'from': 'Addis Ababa', 'to': 'Bahir Dar',
        'date': '2024-01-12', 'seats': ['D2'],
        'passengers': [dict(_ABEBE, id='P007', seat_number='D2')],
        'totalPrice': 750, 'status': 'cancelled', 'bookingDate': '2024-01-08T16:45:00Z',
        'bus_name': 'Selam Bus Express', 'operator_name': 'Selam Bus',
        'departure_time': '07:30', 'arrival_time': '14:00', 'payment_status': 'paid',
    },
]

DEMO_BUS_LOCATIONS: Dict[str, Dict] = {
    'BK001': {
        'lat': 9.145, 'lng': 40.4897, 'speed': 65, 'bus_number': 'ET-1234',
        'operator': 'Sky Bus', 'route': 'Addis Ababa → Bahir Dar', 'eta': '12:30',
        'progress': 65,
    },
    'BK002': {
        'lat': 9.0192, 'lng': 38.7525, 'speed': 0, 'bus_number': 'ET-5678',
        'operator': 'Ethio Bus', 'route': 'Addis Ababa → Gondar', 'eta': '16:30',
        'progress': 0,
    },
}

DEMO_STOP_POINTS: List[Dict] = [
    {'id': 1, 'name': 'Addis Ababa', 'time': '06:00', 'type': 'departure'},
    {'id': 2, 'name': 'Debre Berhan', 'time': '08:30', 'type': 'stop'},
    {'id': 3, 'name': 'Bahir Dar', 'time': '12:30', 'type': 'arrival'},
]


# ============================================================================
# Seat Generation
# ============================================================================

def seat_number_for(position: int) -> str:
    """
    Map a 1-based seat position to its seat number.

    Four seats per row: positions 1-4 are A1-A4, 5-8 are B1-B4, and so on.
    """
    if position < 1:
        raise ValueError(f"Seat position must be >= 1, got {position}")
    row = (position + SEATS_PER_ROW - 1) // SEATS_PER_ROW
    col = ((position - 1) % SEATS_PER_ROW) + 1
    return f"{chr(64 + row)}{col}"


def generate_seats(route: Route, first: int = 1, last: Optional[int] = None,
                   include_availability: bool = True) -> List[Seat]:
    """
    Generate the seat map for a route.

    Availability is threshold based: seat ``i`` is available when
    ``i <= route.available_seats``. It is not linked to the seats any booking
    actually holds.

    Args:
        route: Route whose capacity defines the map
        first: First seat position to include
        last: Last seat position to include (defaults to total_seats)
        include_availability: Whether to populate ``is_available``
    """
    if last is None:
        last = route.total_seats
    price = float(route.price)

    seats = []
    for position in range(first, last + 1):
        seats.append(Seat(
            id=position,
            seat_number=seat_number_for(position),
            is_available=(position <= route.available_seats) if include_availability else None,
            price=price,
        ))
    return seats


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _now_millis() -> int:
    return int(time.time() * 1000)


# ============================================================================
# DemoDataStore
# ============================================================================

class DemoDataStore:
    """
    Process-scoped store answering every fallback operation.

    The store owns working copies of the seed routes, cities and demo user;
    ``reset()`` restores them. Bookings and the synthetic identity are kept in
    the SessionStore.
    """

    def __init__(self, session: SessionStore, latency_enabled: bool = False,
                 latency_min_ms: int = 200, latency_max_ms: int = 1500):
        """
        Initialize the demo store.

        Args:
            session: Session persistence used for bookings and demo identity
            latency_enabled: Sleep before answering to mimic a real backend
            latency_min_ms: Lower bound applied to simulated delays
            latency_max_ms: Upper bound applied to simulated delays
        """
        self.session = session
        self.latency_enabled = latency_enabled
        self.latency_min_ms = latency_min_ms
        self.latency_max_ms = latency_max_ms
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        """Restore all working data to the seed values."""
        with self._lock:
            self._cities = [City(**c) for c in DEMO_CITIES]
            self._routes = [Route(**r) for r in DEMO_ROUTES]
            self._bookings = [Booking(**b) for b in DEMO_BOOKINGS]
            self._user = User(**DEMO_USER)
            created = datetime.now(timezone.utc)
            self._bus_locations = {
                booking_id: BusLocation(last_updated=created, **loc)
                for booking_id, loc in DEMO_BUS_LOCATIONS.items()
            }
            self._stop_points = [StopPoint(**s) for s in DEMO_STOP_POINTS]
        logger.debug("Demo data store reset to seed data")

    def _delay(self, millis: int):
        if not self.latency_enabled:
            return
        millis = max(self.latency_min_ms, min(millis, self.latency_max_ms))
        time.sleep(millis / 1000.0)

    def initialize(self):
        """
        Seed the session's booking list from the demo bookings.

        Does nothing when ``userBookings`` is already present.
        """
        if not self.session.contains(USER_BOOKINGS_KEY):
            self.session.save_bookings(self.canonical_bookings())
            logger.info(f"Seeded session with {len(self._bookings)} demo bookings")

    def canonical_bookings(self) -> List[Dict]:
        return [b.model_dump(by_alias=True) for b in self._bookings]

    # ------------------------------------------------------------------------
    # Routes & Cities
    # ------------------------------------------------------------------------

    def _city(self, city_id: int) -> Optional[City]:
        return next((c for c in self._cities if c.id == city_id), None)

    def _route(self, route_id: int) -> Optional[Route]:
        return next((r for r in self._routes if r.id == route_id), None)

    def search_routes(self, source_id: int, destination_id: int, date: str) -> List[Dict]:
        """
        Find routes between two cities on a date.

        Cities are resolved by id to names; routes match on both names and the
        exact date string. Unknown city ids give an empty list.
        """
        self._delay(500)
        source = self._city(source_id)
        destination = self._city(destination_id)
        if source is None or destination is None:
            return []

        return [
            r.model_dump() for r in self._routes
            if r.source_name == source.name
            and r.destination_name == destination.name
            and r.date == date
        ]

    def get_all_routes(self) -> List[Dict]:
        self._delay(300)
        return [r.model_dump() for r in self._routes]

    def get_route_details(self, route_id: int) -> Optional[Dict]:
        self._delay(200)
        route = self._route(route_id)
        return route.model_dump() if route else None

    def get_route_stop_points(self, route_id: int) -> List[Dict]:
        self._delay(200)
        return [s.model_dump() for s in self._stop_points]

    def get_cities(self) -> List[Dict]:
        self._delay(200)
        return [c.model_dump() for c in self._cities]

    # ------------------------------------------------------------------------
    # Seats
    # ------------------------------------------------------------------------

    def seats_for(self, route_id: int) -> List[Seat]:
        """Full seat map for a route, or an empty list for unknown routes."""
        route = self._route(route_id)
        if route is None:
            return []
        return generate_seats(route)

    def get_route_seats(self, route_id: int) -> List[Dict]:
        self._delay(300)
        return [s.model_dump() for s in self.seats_for(route_id)]

    def get_available_seats(self, route_id: int) -> List[Dict]:
        self._delay(200)
        route = self._route(route_id)
        if route is None:
            return []
        seats = generate_seats(route, last=route.available_seats, include_availability=False)
        return [s.model_dump(exclude_none=True) for s in seats]

    def get_booked_seats(self, route_id: int) -> List[Dict]:
        self._delay(200)
        route = self._route(route_id)
        if route is None:
            return []
        seats = generate_seats(route, first=route.available_seats + 1, include_availability=False)
        return [s.model_dump(exclude_none=True) for s in seats]

    def _adjust_availability(self, route_id: Optional[int], delta: int):
        """Shift a route's free seat count, kept within 0..total_seats."""
        route = self._route(route_id) if route_id is not None else None
        if route is None:
            return
        route.available_seats = max(0, min(route.total_seats, route.available_seats + delta))

    # ------------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------------

    def get_bookings(self) -> List[Dict]:
        """The session's bookings, or the demo bookings when none are stored."""
        self._delay(400)
        bookings = self.session.get_bookings()
        if bookings is not None:
            return bookings
        return self.canonical_bookings()

    def get_booking_details(self, booking_id: str) -> Optional[Dict]:
        self._delay(200)
        for booking in self.session.get_bookings() or []:
            if booking.get('id') == booking_id:
                return booking
        for booking in self._bookings:
            if booking.id == booking_id:
                return booking.model_dump(by_alias=True)
        return None

    def create_booking(self, data: Dict) -> Dict:
        """
        Create a confirmed, paid booking and append it to the session.

        The reference is ``BK`` followed by the 1-based position of the new
        booking in the session list, zero padded to three digits.
        """
        self._delay(1000)
        route_id = data.get('route_id', data.get('routeId'))
        if isinstance(route_id, str) and route_id.strip().isdigit():
            route_id = int(route_id)
        route = self._route(route_id) if route_id is not None else None

        with self._lock:
            existing = self.session.get_bookings() or []
            try:
                booking = Booking(
                    id=f"BK{len(existing) + 1:03d}",
                    route_id=route_id,
                    from_city=data.get('from', route.source_name if route else None),
                    to=data.get('to', route.destination_name if route else None),
                    date=data.get('date', route.date if route else None),
                    seats=list(data.get('seats') or []),
                    passengers=[Passenger(**p) for p in data.get('passengers') or []],
                    total_price=data.get('totalPrice', data.get('total_price', 0)),
                    status='confirmed',
                    booking_date=_now_iso(),
                    bus_name=data.get('bus_name', route.bus_name if route else None),
                    operator_name=data.get('operator_name', route.operator_name if route else None),
                    departure_time=data.get('departure_time', route.departure_time if route else None),
                    arrival_time=data.get('arrival_time', route.arrival_time if route else None),
                    payment_status='paid',
                )
            except (PydanticValidationError, TypeError) as e:
                raise ValidationError(f"Invalid booking data: {e}") from e

            record = booking.model_dump(by_alias=True)
            existing.append(record)
            self.session.save_bookings(existing)
            self._adjust_availability(route_id, -len(booking.seats))

        logger.info(f"Created demo booking {booking.id} for route {route_id} ({len(booking.seats)} seats)")
        return record

    def cancel_booking(self, booking_id: str) -> Dict:
        """
        Mark a booking in the session list as cancelled.

        Unknown ids leave everything untouched and still report success.
        """
        self._delay(500)
        with self._lock:
            bookings = self.session.get_bookings()
            if bookings is None:
                bookings = self.canonical_bookings()

            for booking in bookings:
                if booking.get('id') == booking_id:
                    if booking.get('status') != 'cancelled':
                        booking['status'] = 'cancelled'
                        self._adjust_availability(booking.get('route_id'), len(booking.get('seats') or []))
                    self.session.save_bookings(bookings)
                    logger.info(f"Cancelled demo booking {booking_id}")
                    break
            else:
                logger.debug(f"Cancel requested for unknown booking {booking_id}; nothing to do")

        return {'success': True}

    # ------------------------------------------------------------------------
    # User Profile
    # ------------------------------------------------------------------------

    def get_user_profile(self) -> Dict:
        """The synthetic identity if one is stored, else the demo user."""
        self._delay(200)
        demo_user = self.session.get_demo_user()
        if demo_user is not None:
            return demo_user
        return self._user.model_dump(exclude_none=True)

    def update_user_profile(self, data: Dict) -> Dict:
        self._delay(500)
        demo_user = self.session.get_demo_user()
        if demo_user is not None:
            updated = {**demo_user, **data}
            self.session.set_json(DEMO_USER_KEY, updated)
            return updated

        try:
            self._user = User(**{**self._user.model_dump(), **data})
        except (PydanticValidationError, TypeError) as e:
            raise ValidationError(f"Invalid profile data: {e}") from e
        return self._user.model_dump(exclude_none=True)

    # ------------------------------------------------------------------------
    # Tracking & Payments
    # ------------------------------------------------------------------------

    def get_bus_location(self, booking_id: str) -> Optional[Dict]:
        self._delay(200)
        location = self._bus_locations.get(booking_id)
        if location is None:
            return None
        return location.model_dump(mode='json', by_alias=True)

    def create_payment(self, data: Dict) -> Dict:
        self._delay(1500)
        stamp = _now_millis()
        payment = Payment(
            id=f"PAY{stamp}",
            status='success',
            transaction_id=f"TXN{stamp}",
            amount=data.get('amount'),
            currency='ETB',
            payment_method=data.get('payment_method'),
            created_at=_now_iso(),
        )
        logger.info(f"Recorded demo payment {payment.id} ({payment.amount} {payment.currency})")
        return payment.model_dump()

    def verify_payment(self, data: Dict) -> Dict:
        self._delay(500)
        return PaymentVerification(
            verified=True,
            transaction_id=data.get('transaction_id'),
            status='completed',
        ).model_dump()

