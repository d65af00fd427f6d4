"""
Dependency Injection Container for the Bus Booking client.

This module provides a lightweight dependency injection container that manages
the lifecycle and dependencies of service objects. The demo data store and the
session store are process-scoped: created once on first use and replaced only
through reset().
"""

import logging
from typing import Optional

from api_client import ApiClient
from auth_service import AuthService
from bus_tracker import BusTracker
from config import get_config
from demo_data import DemoDataStore
from navigation import Navigator
from session_store import SessionStore
from transport_service import TransportService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Dependency injection container for managing client services.

    This container provides lazy initialization of services and caches instances
    to ensure singleton behavior.
    """

    def __init__(self):
        """Initialize the service container with empty caches."""
        self._config = None
        self._session_store = None
        self._navigator = None
        self._demo_store = None
        self._api_client = None
        self._transport_service = None
        self._auth_service = None
        self._bus_tracker = None

    def get_config(self):
        """Get the application configuration (singleton)."""
        if self._config is None:
            self._config = get_config()
        return self._config

    def get_session_store(self) -> SessionStore:
        """
        Get the session store (singleton).

        In testing mode the store is memory only so tests never touch the
        session file.
        """
        if self._session_store is None:
            config = self.get_config()
            path = None if config.testing else (config.session_file or None)
            self._session_store = SessionStore(path)
            logger.info(f"SessionStore initialized ({path or 'memory'})")
        return self._session_store

    def get_navigator(self) -> Navigator:
        if self._navigator is None:
            config = self.get_config()
            self._navigator = Navigator(
                self.get_session_store(),
                protected_paths=config.protected_paths,
                login_path=config.login_path,
                home_path=config.home_path,
            )
        return self._navigator

    def get_demo_store(self) -> DemoDataStore:
        """Get the demo fallback data store (singleton)."""
        if self._demo_store is None:
            config = self.get_config()
            self._demo_store = DemoDataStore(
                self.get_session_store(),
                latency_enabled=config.demo_latency_enabled,
                latency_min_ms=config.demo_latency_min_ms,
                latency_max_ms=config.demo_latency_max_ms,
            )
            logger.info("DemoDataStore initialized")
        return self._demo_store

    def get_api_client(self) -> ApiClient:
        """Get the backend API client (singleton)."""
        if self._api_client is None:
            config = self.get_config()
            self._api_client = ApiClient(
                config.api_base_url,
                self.get_session_store(),
                navigator=self.get_navigator(),
                timeout=config.request_timeout,
            )
            logger.info(f"ApiClient initialized for {config.api_base_url}")
        return self._api_client

    def get_transport_service(self) -> TransportService:
        """Get the service facade (singleton)."""
        if self._transport_service is None:
            self._transport_service = TransportService(
                self.get_api_client(),
                self.get_demo_store(),
            )
        return self._transport_service

    def get_auth_service(self) -> AuthService:
        if self._auth_service is None:
            self._auth_service = AuthService(
                self.get_transport_service(),
                self.get_session_store(),
                self.get_navigator(),
            )
        return self._auth_service

    def get_bus_tracker(self, start: Optional[dict] = None) -> BusTracker:
        """
        Get the simulated bus tracker (singleton).

        The tracker is created stopped; callers start it when a tracking view
        opens.
        """
        if self._bus_tracker is None:
            self._bus_tracker = BusTracker(
                start=start,
                interval=self.get_config().tracking_interval_seconds,
            )
        return self._bus_tracker

    def reset(self):
        """
        Reset all cached instances. Useful for testing.

        This forces recreation of all services on next access.
        """
        if self._bus_tracker is not None:
            self._bus_tracker.stop()

        self._config = None
        self._session_store = None
        self._navigator = None
        self._demo_store = None
        self._api_client = None
        self._transport_service = None
        self._auth_service = None
        self._bus_tracker = None
        logger.info("Service container reset")


# Global container instance
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container instance (singleton).

    Returns:
        ServiceContainer instance
    """
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container():
    """
    Reset the global container. Useful for testing.

    Forces recreation of all services on next access.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None
