#!/usr/bin/env python3
"""
Bus Booking API Client

Thin wrapper around the bus booking REST API. Every call returns either an
ApiResponse or an ApiError; the client never raises for backend failures and
never substitutes demo data, which is the service facade's job.

Main class: ApiClient
Attaches the session's bearer token, enforces the request timeout and
refreshes an expired access token once per request.

Usage:
    from api_client import ApiClient
    from session_store import SessionStore

    client = ApiClient('http://localhost:8000/api', SessionStore())
    result = client.get('/cities/')
    if isinstance(result, ApiResponse):
        print(result.data)
"""

import logging
from typing import Any, Dict, Optional, Union

import requests

from models import ApiError, ApiResponse, TokenPair
from navigation import Navigator
from session_store import SessionStore

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Constants
# ============================================================================

DEFAULT_TIMEOUT = 5.0
TOKEN_REFRESH_PATH = '/users/token/refresh/'

ApiResult = Union[ApiResponse, ApiError]


# ============================================================================
# ApiClient Class
# ============================================================================

class ApiClient:
    """
    Bus Booking REST API client.

    Authentication:
    - Sends ``Authorization: Bearer <access_token>`` whenever the session
      holds an access token.
    - A 401 response triggers one token refresh (only when a refresh token
      exists) followed by exactly one replay of the original request.
    - If the refresh fails both tokens are cleared and, on protected paths,
      the navigator is sent to the login page.

    Example:
        >>> client = ApiClient(base_url, session, navigator)
        >>> result = client.post('/bus/routes/search/', json={'source_id': 1})
        >>> isinstance(result, ApiError)
        True
    """

    def __init__(self, base_url: str, session: SessionStore,
                 navigator: Optional[Navigator] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 http: Optional[requests.Session] = None):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. ``http://host:8000/api``
            session: Session persistence holding the token pair
            navigator: Navigation state used for login redirects
            timeout: Per-request timeout in seconds
            http: Preconfigured requests session (mainly for tests)
        """
        self.base_url = base_url.rstrip('/')
        self.session = session
        self.navigator = navigator
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update({'Content-Type': 'application/json'})

    # ------------------------------------------------------------------------
    # Private Helper Methods
    # ------------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _auth_headers(self) -> Dict[str, str]:
        access_token, _ = self.session.get_tokens()
        if access_token:
            return {'Authorization': f'Bearer {access_token}'}
        return {}

    def _send(self, method: str, path: str, json: Any = None,
              params: Optional[Dict] = None) -> ApiResult:
        """Issue a single HTTP request and wrap the outcome."""
        try:
            response = self.http.request(
                method,
                self._url(path),
                json=json,
                params=params,
                headers=self._auth_headers(),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            return ApiError(error='timeout', message=f"{method} {path} timed out after {self.timeout}s: {e}")
        except requests.RequestException as e:
            return ApiError(error='network', message=f"{method} {path} failed: {e}")

        status = response.status_code
        if status == 401:
            return ApiError(error='unauthorized', message=f"{method} {path} returned 401", status_code=401)
        if status >= 400:
            return ApiError(
                error='http',
                message=f"{method} {path} failed with status {status}: {response.text[:200]}",
                status_code=status,
            )

        if status == 204 or not response.content:
            return ApiResponse(status_code=status, data=None)

        try:
            data = response.json()
        except ValueError as e:
            return ApiError(
                error='invalid_response',
                message=f"{method} {path} returned a non-JSON body: {e}",
                status_code=status,
            )
        return ApiResponse(status_code=status, data=data)

    def _refresh_tokens(self) -> bool:
        """
        Exchange the refresh token for a new token pair.

        Returns:
            True if a new pair was stored
        """
        _, refresh_token = self.session.get_tokens()
        result = self._send('POST', TOKEN_REFRESH_PATH, json={'refresh': refresh_token})
        if isinstance(result, ApiResponse):
            try:
                tokens = TokenPair(**(result.data or {}))
            except (TypeError, ValueError) as e:
                logger.warning(f"Token refresh returned an unusable body: {e}")
            else:
                self.session.set_tokens(tokens.access, tokens.refresh)
                logger.info("Access token refreshed")
                return True
        else:
            logger.warning(f"Token refresh failed: {result.message}")

        self.session.clear_tokens()
        if self.navigator is not None:
            self.navigator.redirect_to_login_if_protected()
        return False

    # ------------------------------------------------------------------------
    # Public API Methods
    # ------------------------------------------------------------------------

    def request(self, method: str, path: str, json: Any = None,
                params: Optional[Dict] = None) -> ApiResult:
        """
        Perform an API request with token refresh.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            json: JSON body
            params: Query string parameters

        Returns:
            Union[ApiResponse, ApiError]

            On Success - ApiResponse with the status code and decoded body.
            On Error - ApiError whose ``error`` is one of ``timeout``,
            ``network``, ``http``, ``unauthorized`` or ``invalid_response``.
        """
        method = method.upper()
        result = self._send(method, path, json=json, params=params)

        if isinstance(result, ApiError) and result.status_code == 401:
            _, refresh_token = self.session.get_tokens()
            if refresh_token and path != TOKEN_REFRESH_PATH:
                if self._refresh_tokens():
                    result = self._send(method, path, json=json, params=params)

        if isinstance(result, ApiError):
            logger.debug(f"{method} {path} -> {result.error}: {result.message}")
        return result

    def get(self, path: str, params: Optional[Dict] = None) -> ApiResult:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Any = None) -> ApiResult:
        return self.request('POST', path, json=json)

    def put(self, path: str, json: Any = None) -> ApiResult:
        return self.request('PUT', path, json=json)

    def delete(self, path: str) -> ApiResult:
        return self.request('DELETE', path)
