"""
Session persistence for the Bus Booking client.

A durable, string-keyed store that survives process restarts on one device.
It holds the active session's tokens, the synthetic demo identity and the
user's accumulated bookings. Values are strings; structured values are stored
JSON-encoded, the two tokens are stored raw.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
DEMO_USER_KEY = "demo_user_data"
DEMO_CREDENTIALS_KEY = "demo_login_credentials"
USER_BOOKINGS_KEY = "userBookings"
RETURN_URL_KEY = "returnUrl"

SESSION_KEYS = (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    DEMO_USER_KEY,
    DEMO_CREDENTIALS_KEY,
    USER_BOOKINGS_KEY,
)


class SessionStore:
    """
    Thread-safe key-value store backed by a JSON file.

    When ``path`` is None the store lives in memory only, which is what the
    tests use. Every mutation rewrites the whole file through a temporary file
    so a crash never leaves a half-written session behind.
    """

    def __init__(self, path: Optional[str] = None):
        """
        Initialize the session store.

        Args:
            path: JSON file holding the session, or None for a memory-only store
        """
        self.path = Path(path) if path else None
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._load()

    def _load(self):
        if self.path is None or not self.path.exists():
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read session file {self.path}: {e}")
            return

        if not isinstance(raw, dict):
            logger.error(f"Ignoring session file {self.path}: expected a JSON object")
            return

        self._data = {str(k): str(v) for k, v in raw.items()}
        logger.debug(f"Loaded {len(self._data)} session keys from {self.path}")

    def _flush(self):
        """Write the current contents to disk. Caller holds the lock."""
        if self.path is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    # ------------------------------------------------------------------------
    # Raw key access
    # ------------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        """Return the stored string for ``key`` or None."""
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str):
        """Store ``value`` under ``key``."""
        with self._lock:
            self._data[key] = str(value)
            self._flush()

    def remove(self, key: str):
        """Remove ``key``; missing keys are ignored."""
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._flush()

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())

    def clear_session(self):
        """
        Remove every session key.

        Keys are removed one after another with no rollback; the navigation
        return URL is not part of the session and is left alone.
        """
        for key in SESSION_KEYS:
            self.remove(key)
        logger.info("Session cleared")

    # ------------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------------

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Decode the JSON value stored under ``key``.

        Corrupt values are logged and reported as ``default``.
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing stored {key}: {e}")
            return default

    def set_json(self, key: str, value: Any):
        self.set(key, json.dumps(value))

    # ------------------------------------------------------------------------
    # Session helpers
    # ------------------------------------------------------------------------

    def get_tokens(self) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(access_token, refresh_token)``."""
        return self.get(ACCESS_TOKEN_KEY), self.get(REFRESH_TOKEN_KEY)

    def set_tokens(self, access: str, refresh: str):
        self.set(ACCESS_TOKEN_KEY, access)
        self.set(REFRESH_TOKEN_KEY, refresh)

    def clear_tokens(self):
        self.remove(ACCESS_TOKEN_KEY)
        self.remove(REFRESH_TOKEN_KEY)

    def is_logged_in(self) -> bool:
        return self.get(ACCESS_TOKEN_KEY) is not None

    def get_demo_user(self) -> Optional[Dict]:
        """Return the synthetic identity, or None when the session is authoritative."""
        user = self.get_json(DEMO_USER_KEY)
        return user if isinstance(user, dict) else None

    def get_bookings(self) -> Optional[List[Dict]]:
        """
        Return the persisted booking list.

        None means the key is absent or unreadable, which callers treat as
        "not seeded yet".
        """
        bookings = self.get_json(USER_BOOKINGS_KEY)
        if bookings is None:
            return None
        if not isinstance(bookings, list):
            logger.error(f"Ignoring stored {USER_BOOKINGS_KEY}: expected a list")
            return None
        return bookings

    def save_bookings(self, bookings: List[Dict]):
        self.set_json(USER_BOOKINGS_KEY, bookings)
