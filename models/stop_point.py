"""Model for a stop along a route."""

from typing import Literal
from pydantic import BaseModel, Field


class StopPoint(BaseModel):
    """Model for a stop along a route."""
    id: int = Field(..., description="Stop identifier")
    name: str = Field(..., description="Stop name")
    time: str = Field(..., description="Scheduled time (HH:MM)")
    type: Literal["departure", "stop", "arrival"] = Field(..., description="Stop kind")
