"""Model for a scheduled bus route."""

from typing import List
from pydantic import BaseModel, Field


class Route(BaseModel):
    """Model for a scheduled bus route."""
    id: int = Field(..., description="Route identifier")
    bus_name: str = Field(..., description="Marketing name of the bus")
    operator_name: str = Field(..., description="Bus operating company")
    source_name: str = Field(..., description="Departure city name")
    destination_name: str = Field(..., description="Arrival city name")
    departure_time: str = Field(..., description="Departure time (HH:MM)")
    arrival_time: str = Field(..., description="Arrival time (HH:MM)")
    date: str = Field(..., description="Travel date (YYYY-MM-DD)")
    price: str = Field(..., description="Fare per seat as a decimal string")
    available_seats: int = Field(..., ge=0, description="Seats still available")
    total_seats: int = Field(..., ge=0, description="Seat capacity of the bus")
    bus_type: str = Field(default="Standard", description="Bus class (Standard, Premium, Deluxe)")
    amenities: List[str] = Field(default_factory=list, description="On-board amenities")
    rating: float = Field(default=0.0, description="Average passenger rating")
