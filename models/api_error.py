"""Model for a failed backend call."""

from typing import Optional
from pydantic import BaseModel, Field


class ApiError(BaseModel):
    """Model for a failed backend call."""
    error: str = Field(..., description="Error kind (timeout, network, http, unauthorized, invalid_response)")
    message: str = Field(..., description="Detailed error description")
    status_code: Optional[int] = Field(default=None, description="HTTP status code when one was received")
