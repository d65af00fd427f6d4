"""Model for a seat booking."""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from .passenger import Passenger


class Booking(BaseModel):
    """
    Model for a seat booking.

    The wire format uses ``from``, ``totalPrice`` and ``bookingDate``; those are
    exposed as aliases so ``model_dump(by_alias=True)`` reproduces it.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Booking reference (BK + 3-digit sequence)")
    route_id: Optional[int] = Field(default=None, description="Booked route identifier")
    from_city: Optional[str] = Field(default=None, alias="from", description="Departure city name")
    to: Optional[str] = Field(default=None, description="Arrival city name")
    date: Optional[str] = Field(default=None, description="Travel date")
    seats: List[str] = Field(default_factory=list, description="Booked seat numbers")
    passengers: List[Passenger] = Field(default_factory=list, description="Travelling passengers")
    total_price: float = Field(default=0.0, alias="totalPrice", description="Total fare")
    status: Literal["confirmed", "completed", "cancelled"] = Field(
        default="confirmed", description="Booking lifecycle status"
    )
    booking_date: str = Field(..., alias="bookingDate", description="ISO timestamp of the booking")
    bus_name: Optional[str] = Field(default=None, description="Bus name")
    operator_name: Optional[str] = Field(default=None, description="Bus operator")
    departure_time: Optional[str] = Field(default=None, description="Departure time")
    arrival_time: Optional[str] = Field(default=None, description="Arrival time")
    payment_status: Literal["paid", "pending", "failed"] = Field(
        default="paid", description="Payment status"
    )
