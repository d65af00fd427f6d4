"""
Navigation state shared between the client library and the presentation layer.

The presentation layer reports where the user currently is; the library uses
it to decide whether an expired session should force a login redirect, and to
send the user back to the page they came from after logging in.
"""

import logging
from typing import Callable, List, Optional, Sequence

from session_store import RETURN_URL_KEY, SessionStore

logger = logging.getLogger(__name__)


class Navigator:
    """Tracks the current path and records redirects issued by the library."""

    def __init__(self, session: SessionStore, protected_paths: Sequence[str],
                 login_path: str = "/login", home_path: str = "/",
                 on_navigate: Optional[Callable[[str], None]] = None):
        self.session = session
        self.protected_paths = list(protected_paths)
        self.login_path = login_path
        self.home_path = home_path
        self.on_navigate = on_navigate
        self.current_path = home_path
        self.history: List[str] = []

    def is_protected(self, path: Optional[str] = None) -> bool:
        path = self.current_path if path is None else path
        return any(path.startswith(prefix) for prefix in self.protected_paths)

    def navigate(self, path: str):
        self.history.append(path)
        self.current_path = path
        logger.debug(f"Navigating to {path}")
        if self.on_navigate is not None:
            self.on_navigate(path)

    def redirect_to_login_if_protected(self) -> bool:
        """
        Send the user to the login page when they are on a protected path.

        Returns:
            True if a redirect was issued
        """
        if not self.is_protected():
            return False
        logger.info(f"Session expired on protected path {self.current_path}; redirecting to login")
        self.navigate(self.login_path)
        return True

    def remember_return_url(self, path: Optional[str] = None):
        self.session.set(RETURN_URL_KEY, path or self.current_path)

    def pop_return_url(self) -> str:
        """Return and forget the stored return URL, defaulting to home."""
        url = self.session.get(RETURN_URL_KEY) or self.home_path
        self.session.remove(RETURN_URL_KEY)
        return url
