"""Model for a successful backend response."""

from typing import Any
from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """Model for a successful backend response."""
    status_code: int = Field(..., description="HTTP status code")
    data: Any = Field(default=None, description="Decoded JSON body")
