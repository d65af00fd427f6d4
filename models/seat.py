"""Model for a seat on a route."""

from typing import Optional
from pydantic import BaseModel, Field


class Seat(BaseModel):
    """Model for a seat on a route."""
    id: int = Field(..., ge=1, description="Positional seat index (1..total_seats)")
    seat_number: str = Field(..., description="Row letter followed by column digit (e.g. A1)")
    is_available: Optional[bool] = Field(default=None, description="Whether the seat can be booked")
    price: float = Field(..., description="Seat fare")
