"""Model for a passenger travelling on a booking."""

from typing import Optional
from pydantic import BaseModel, Field


class Passenger(BaseModel):
    """Model for a passenger travelling on a booking."""
    id: Optional[str] = Field(default=None, description="Passenger identifier")
    name: str = Field(..., description="Passenger full name")
    phone: Optional[str] = Field(default=None, description="Contact phone number")
    seat_number: Optional[str] = Field(default=None, description="Assigned seat number")
    age: Optional[int] = Field(default=None, description="Passenger age")
    gender: Optional[str] = Field(default=None, description="Passenger gender")
