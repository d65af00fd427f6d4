"""
Exception types raised by the booking client.

Backend unavailability never surfaces through the fallback operations; these
exceptions cover invalid input and the operations that have no demo fallback.
"""

from typing import Optional

from models import ApiError


class TransportError(Exception):
    """Base class for booking client errors."""


class ValidationError(TransportError, ValueError):
    """Raised for input that no backend or fallback could answer."""


class RemoteServiceError(TransportError):
    """Raised when a call without demo fallback fails at the backend."""

    def __init__(self, operation: str, api_error: ApiError):
        self.operation = operation
        self.api_error = api_error
        super().__init__(f"{operation} failed: {api_error.error} - {api_error.message}")

    @property
    def status_code(self) -> Optional[int]:
        return self.api_error.status_code


class AuthenticationError(RemoteServiceError):
    """Raised when a request stays unauthorized after the token refresh attempt."""
