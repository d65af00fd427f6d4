"""Model for an access/refresh token pair."""

from pydantic import BaseModel, Field


class TokenPair(BaseModel):
    """Model for an access/refresh token pair."""
    access: str = Field(..., description="Bearer access token")
    refresh: str = Field(..., description="Refresh token")
