"""Model for a city served by the bus network."""

from pydantic import BaseModel, Field


class City(BaseModel):
    """Model for a city served by the bus network."""
    id: int = Field(..., description="City identifier")
    name: str = Field(..., description="City name")
    region: str = Field(..., description="Administrative region")
