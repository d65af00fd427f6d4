"""
Configuration management for the Bus Booking client.

Centralizes all configuration with type-safe defaults and validation.
"""

from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class AppConfig(BaseSettings):
    """Application configuration with environment variable support."""

    testing: bool = Field(
        default=False,
        description="Enable testing mode"
    )

    # Backend API Configuration
    api_base_url: str = Field(
        default="http://150.40.245.251:8000/api",
        description="Base URL of the bus booking REST API"
    )
    request_timeout: float = Field(
        default=5.0,
        description="Timeout in seconds for every backend request"
    )

    # Session Configuration
    session_file: str = Field(
        default=".session/session.json",
        description="Path of the durable session store (empty for memory only)"
    )

    # Navigation Configuration
    protected_paths: List[str] = Field(
        default=["/payment", "/bookings", "/profile", "/book"],
        description="Paths that force a login redirect when the session expires"
    )
    login_path: str = Field(
        default="/login",
        description="Login entry point"
    )
    home_path: str = Field(
        default="/",
        description="Default destination after login"
    )

    # Demo Fallback Configuration
    demo_latency_enabled: bool = Field(
        default=False,
        description="Simulate backend latency on the demo fallback path"
    )
    demo_latency_min_ms: int = Field(
        default=200,
        description="Minimum simulated latency in milliseconds"
    )
    demo_latency_max_ms: int = Field(
        default=1500,
        description="Maximum simulated latency in milliseconds"
    )

    # Tracking Configuration
    tracking_interval_seconds: float = Field(
        default=5.0,
        description="Interval between simulated bus position updates"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: str = Field(
        default="logs/booking.log",
        description="Log file path"
    )
    log_max_bytes: int = Field(
        default=10485760,  # 10MB
        description="Maximum log file size in bytes"
    )
    log_backup_count: int = Field(
        default=10,
        description="Number of backup log files to keep"
    )

    @field_validator('protected_paths', mode='before')
    @classmethod
    def parse_protected_paths(cls, v):
        """Parse protected paths from string or list."""
        if isinstance(v, str):
            return [path.strip() for path in v.split(',') if path.strip()]
        return v

    @field_validator('testing', 'demo_latency_enabled', mode='before')
    @classmethod
    def parse_bool(cls, v):
        """Parse boolean values from environment strings."""
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on')
        return v

    @field_validator('api_base_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip('/')

    def validate_latency_range(self) -> List[str]:
        """
        Validate the simulated latency bounds.

        Returns:
            List of problems found (empty if the range is usable)
        """
        problems = []

        if self.demo_latency_min_ms < 0:
            problems.append("DEMO_LATENCY_MIN_MS must not be negative")

        if self.demo_latency_max_ms < self.demo_latency_min_ms:
            problems.append("DEMO_LATENCY_MAX_MS must be >= DEMO_LATENCY_MIN_MS")

        return problems

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config
