"""
Data models for the Bus Booking client.

This package contains Pydantic models for API payloads and fallback data.
"""

from .city import City
from .route import Route
from .seat import Seat
from .passenger import Passenger
from .booking import Booking
from .user import User
from .token_pair import TokenPair
from .payment import Payment, PaymentVerification
from .bus_location import BusLocation
from .stop_point import StopPoint
from .api_response import ApiResponse
from .api_error import ApiError

__all__ = [
    'City',
    'Route',
    'Seat',
    'Passenger',
    'Booking',
    'User',
    'TokenPair',
    'Payment',
    'PaymentVerification',
    'BusLocation',
    'StopPoint',
    'ApiResponse',
    'ApiError',
]
