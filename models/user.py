"""Model for the session's user identity."""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """Model for the session's user identity (authoritative or synthetic)."""
    id: int = Field(..., description="User identifier")
    first_name: Optional[str] = Field(default=None, description="Given name")
    last_name: Optional[str] = Field(default=None, description="Family name")
    phone_number: str = Field(..., description="Login phone number")
    email: Optional[str] = Field(default=None, description="Email address")
    user_type: Literal["REGULAR", "COMPANY"] = Field(default="REGULAR", description="Account type")
    role: Literal[
        "USER", "ADMIN", "COMPANY_ADMIN", "COMPANY_STAFF", "DRIVER", "CONDUCTOR"
    ] = Field(default="USER", description="Account role")
    address: Optional[str] = Field(default=None, description="Postal address")
    date_of_birth: Optional[str] = Field(default=None, description="Date of birth")
    created_at: Optional[str] = Field(default=None, description="Account creation timestamp")
