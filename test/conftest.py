"""
Pytest configuration for all tests.
Sets up environment variables and fixtures used across test modules.
"""

import os
import pytest
import requests
from unittest.mock import MagicMock


# Set environment variable BEFORE any other imports
# This must happen at module import time to affect config initialization
os.environ['TESTING'] = 'true'


def make_response(status_code=200, json_data=None, text=''):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.content = b'' if json_data is None and not text else b'{}'
    response.text = text
    return response


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the dependency injection container before each test."""
    from dependencies import reset_container
    reset_container()
    yield
    reset_container()


@pytest.fixture
def session_store():
    """Memory-only session store."""
    from session_store import SessionStore
    return SessionStore()


@pytest.fixture
def navigator(session_store):
    from navigation import Navigator
    return Navigator(session_store, protected_paths=['/payment', '/bookings', '/profile', '/book'])


@pytest.fixture
def demo_store(session_store):
    from demo_data import DemoDataStore
    return DemoDataStore(session_store)


@pytest.fixture
def http():
    """Mock requests.Session; configure ``http.request`` per test."""
    mock_http = MagicMock()
    mock_http.headers = {}
    return mock_http


@pytest.fixture
def offline_http(http):
    """Mock requests.Session whose every request fails to connect."""
    http.request.side_effect = requests.ConnectionError("Connection refused")
    return http


@pytest.fixture
def api_client(session_store, navigator, http):
    from api_client import ApiClient
    return ApiClient('http://backend.test/api', session_store, navigator=navigator, http=http)


@pytest.fixture
def offline_service(session_store, navigator, offline_http, demo_store):
    """TransportService whose backend is unreachable."""
    from api_client import ApiClient
    from transport_service import TransportService
    client = ApiClient('http://backend.test/api', session_store, navigator=navigator, http=offline_http)
    return TransportService(client, demo_store)
