"""Model for a bus position snapshot."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class BusLocation(BaseModel):
    """Model for a bus position snapshot."""
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., description="Latitude")
    lng: float = Field(..., description="Longitude")
    speed: float = Field(default=0.0, description="Speed in km/h")
    last_updated: datetime = Field(..., alias="lastUpdated", description="Time of the snapshot")
    bus_number: str = Field(default="", description="Registration plate")
    operator: str = Field(default="", description="Bus operator")
    route: str = Field(default="", description="Human readable route")
    eta: str = Field(default="", description="Estimated arrival time")
    progress: float = Field(default=0.0, description="Journey progress percentage")
