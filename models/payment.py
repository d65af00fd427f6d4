"""Models for mock payment results."""

from typing import Any, Optional
from pydantic import BaseModel, Field


class Payment(BaseModel):
    """Model for a payment record."""
    id: str = Field(..., description="Payment identifier")
    status: str = Field(..., description="Payment status")
    transaction_id: str = Field(..., description="Transaction reference")
    amount: Any = Field(default=None, description="Charged amount")
    currency: str = Field(default="ETB", description="ISO currency code")
    payment_method: Optional[str] = Field(default=None, description="mobile_money, bank or card")
    created_at: str = Field(..., description="ISO timestamp of the payment")


class PaymentVerification(BaseModel):
    """Model for a payment verification result."""
    verified: bool = Field(..., description="Whether the payment was verified")
    transaction_id: Optional[str] = Field(default=None, description="Verified transaction reference")
    status: str = Field(..., description="Verification status")
