"""
Authentication flow for the Bus Booking client.

Login and signup go to the backend first. When the backend cannot be reached
(or rejects the call) a synthetic demo identity is created instead, stored in
the session together with demo tokens, and treated as a successful login.
"""

import json
import logging
import time
from typing import Callable, Dict, Optional

from errors import TransportError
from models import TokenPair, User
from navigation import Navigator
from session_store import (
    DEMO_CREDENTIALS_KEY,
    DEMO_USER_KEY,
    SessionStore,
)
from transport_service import TransportService

logger = logging.getLogger(__name__)


def _millis() -> int:
    return int(time.time() * 1000)


def split_full_name(name: str):
    """
    Split a full name on the first space.

    Returns:
        (first_name, last_name) where last_name is None for single names
    """
    first, _, rest = (name or '').strip().partition(' ')
    rest = rest.strip()
    return first, (rest or None)


def build_demo_user(phone_number: str, first_name: str = "Demo",
                    last_name: Optional[str] = "User",
                    clock: Callable[[], int] = _millis) -> Dict:
    """
    Create a synthetic user identity.

    The id is the current time in milliseconds, which is unique enough for a
    single-device demo session but not collision free.
    """
    user = User(
        id=clock(),
        first_name=first_name,
        last_name=last_name,
        phone_number=phone_number,
        user_type="REGULAR",
        role="USER",
        email=f"{phone_number.replace('+', '')}@demo.com",
    )
    return user.model_dump(exclude_none=True)


class AuthService:
    """Login, signup, logout and session restore."""

    def __init__(self, transport: TransportService, session: SessionStore,
                 navigator: Navigator, clock: Callable[[], int] = _millis):
        """
        Initialize the auth service.

        Args:
            transport: Service facade used for the auth endpoints and profile fetch
            session: Session persistence for tokens and the demo identity
            navigator: Navigation state used after login and logout
            clock: Millisecond clock used for synthetic ids and tokens
        """
        self.transport = transport
        self.session = session
        self.navigator = navigator
        self.clock = clock
        self.user: Optional[Dict] = None

    @property
    def current_user(self) -> Optional[Dict]:
        return self.user

    @property
    def is_demo_session(self) -> bool:
        return self.session.get_demo_user() is not None

    def _start_demo_session(self, user: Dict, phone_number: str, password: str):
        stamp = self.clock()
        self.session.set_tokens(f"demo_access_token_{stamp}", f"demo_refresh_token_{stamp}")
        self.session.set_json(DEMO_USER_KEY, user)
        self.session.set_json(DEMO_CREDENTIALS_KEY, {'phoneNumber': phone_number, 'password': password})
        self.user = user

    def _return_to_previous_page(self):
        self.navigator.navigate(self.navigator.pop_return_url())

    def login(self, phone_number: str, password: str) -> Dict:
        """
        Log in, falling back to a synthetic identity when the backend fails.

        Returns:
            The active user
        """
        try:
            tokens = TokenPair(**self.transport.login_request(phone_number, password))
            self.session.set_tokens(tokens.access, tokens.refresh)
            self.session.remove(DEMO_USER_KEY)
            self.session.remove(DEMO_CREDENTIALS_KEY)
            self.user = self.transport.get_user_profile()
            logger.info(f"Logged in as {phone_number}")
        except (TransportError, TypeError, ValueError) as e:
            logger.warning(f"Backend not available, using fallback authentication: {e}")
            self._start_demo_session(
                build_demo_user(phone_number, clock=self.clock), phone_number, password
            )

        self._return_to_previous_page()
        return self.user

    def signup(self, name: str, phone_number: str, password: str) -> Dict:
        """
        Register and log in, falling back to a synthetic identity built from
        ``name`` when registration fails.
        """
        try:
            self.transport.register_request(phone_number, password)
        except TransportError as e:
            logger.warning(f"Backend not available, using fallback signup: {e}")
            first_name, last_name = split_full_name(name)
            self._start_demo_session(
                build_demo_user(phone_number, first_name, last_name, clock=self.clock),
                phone_number,
                password,
            )
            self._return_to_previous_page()
            return self.user

        return self.login(phone_number, password)

    def logout(self):
        self.session.clear_session()
        self.user = None
        self.navigator.navigate(self.navigator.login_path)
        logger.info("Logged out")

    def restore_session(self) -> Optional[Dict]:
        """
        Rebuild the current user from a previous run.

        A stored demo identity wins over the backend. Corrupt demo data ends
        the session.
        """
        if not self.session.is_logged_in():
            self.user = None
            return None

        raw_demo_user = self.session.get(DEMO_USER_KEY)
        if raw_demo_user is not None:
            try:
                user = json.loads(raw_demo_user)
                if not isinstance(user, dict):
                    raise ValueError("demo user is not an object")
            except ValueError as e:
                logger.error(f"Error parsing demo user data: {e}")
                self.session.clear_tokens()
                self.session.remove(DEMO_USER_KEY)
                self.session.remove(DEMO_CREDENTIALS_KEY)
                self.user = None
                return None
            self.user = user
            return user

        self.user = self.transport.get_user_profile()
        return self.user
