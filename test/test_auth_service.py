"""
Unit tests for auth_service.py.

Tests cover:
- Backend login storing tokens and profile
- Fallback login and signup creating a synthetic identity
- Return URL navigation
- Logout and session restore
"""

import pytest

from api_client import ApiClient
from auth_service import AuthService, build_demo_user, split_full_name
from conftest import make_response
from session_store import (
    ACCESS_TOKEN_KEY,
    DEMO_CREDENTIALS_KEY,
    DEMO_USER_KEY,
    SESSION_KEYS,
)
from transport_service import TransportService

FIXED_MILLIS = 1705312800000


@pytest.fixture
def auth(session_store, navigator, http, demo_store):
    client = ApiClient('http://backend.test/api', session_store, navigator=navigator, http=http)
    transport = TransportService(client, demo_store)
    return AuthService(transport, session_store, navigator, clock=lambda: FIXED_MILLIS)


@pytest.fixture
def offline_auth(auth, offline_http):
    return auth


class TestHelpers:
    """Tests for name splitting and demo user synthesis."""

    def test_split_full_name(self):
        assert split_full_name('Tigist Haile') == ('Tigist', 'Haile')
        assert split_full_name('Abebe Kebede Tesfaye') == ('Abebe', 'Kebede Tesfaye')
        assert split_full_name('Madonna') == ('Madonna', None)

    def test_build_demo_user(self):
        user = build_demo_user('+251911234567', clock=lambda: 123)
        assert user == {
            'id': 123,
            'first_name': 'Demo',
            'last_name': 'User',
            'phone_number': '+251911234567',
            'email': '251911234567@demo.com',
            'user_type': 'REGULAR',
            'role': 'USER',
        }

    def test_build_demo_user_without_last_name(self):
        user = build_demo_user('0911', 'Madonna', None, clock=lambda: 1)
        assert 'last_name' not in user


class TestLogin:
    """Tests for login."""

    def test_backend_login(self, auth, http, session_store, navigator):
        http.request.side_effect = [
            make_response(200, {'access': 'acc', 'refresh': 'ref'}),
            make_response(200, {'id': 9, 'phone_number': '+251911000000'}),
        ]

        user = auth.login('+251911000000', 'secret')

        assert user == {'id': 9, 'phone_number': '+251911000000'}
        assert session_store.get_tokens() == ('acc', 'ref')
        assert session_store.get(DEMO_USER_KEY) is None
        assert navigator.current_path == '/'

    def test_backend_login_replaces_earlier_demo_identity(self, auth, http, offline_http, session_store):
        auth.login('+251911000000', 'secret')
        assert session_store.get_demo_user() is not None

        http.request.side_effect = [
            make_response(200, {'access': 'acc', 'refresh': 'ref'}),
            make_response(200, {'id': 42, 'phone_number': '+251911000000'}),
            make_response(200, {'id': 42, 'phone_number': '+251911000000'}),
        ]
        auth.login('+251911000000', 'secret')

        assert session_store.get(DEMO_USER_KEY) is None
        assert session_store.get(DEMO_CREDENTIALS_KEY) is None
        assert auth.is_demo_session is False
        assert auth.restore_session() == {'id': 42, 'phone_number': '+251911000000'}

    def test_fallback_login_creates_demo_identity(self, offline_auth, session_store):
        user = offline_auth.login('+251911234567', 'pw')

        assert user['id'] == FIXED_MILLIS
        assert user['first_name'] == 'Demo'
        assert user['email'] == '251911234567@demo.com'
        assert session_store.get_tokens() == (
            f'demo_access_token_{FIXED_MILLIS}',
            f'demo_refresh_token_{FIXED_MILLIS}',
        )
        assert session_store.get_demo_user() == user
        assert session_store.get_json(DEMO_CREDENTIALS_KEY) == {'phoneNumber': '+251911234567', 'password': 'pw'}
        assert offline_auth.is_demo_session is True

    def test_rejected_credentials_also_fall_back(self, auth, http, session_store):
        http.request.return_value = make_response(400, text='bad credentials')

        user = auth.login('+251911234567', 'wrong')

        assert user['first_name'] == 'Demo'
        assert session_store.get(ACCESS_TOKEN_KEY).startswith('demo_access_token_')

    def test_login_returns_to_stored_url(self, offline_auth, navigator, session_store):
        navigator.remember_return_url('/payment')

        offline_auth.login('+251911234567', 'pw')

        assert navigator.current_path == '/payment'
        assert session_store.get('returnUrl') is None

    def test_profile_after_fallback_login_is_demo_identity(self, offline_auth):
        user = offline_auth.login('+251911234567', 'pw')
        assert offline_auth.transport.get_user_profile() == user


class TestSignup:
    """Tests for signup."""

    def test_fallback_signup_splits_name(self, offline_auth, session_store):
        user = offline_auth.signup('Tigist Haile', '+251922345678', 'pw')

        assert user['first_name'] == 'Tigist'
        assert user['last_name'] == 'Haile'
        assert session_store.get_demo_user() == user

    def test_fallback_signup_single_name(self, offline_auth):
        user = offline_auth.signup('Tigist', '+251922345678', 'pw')
        assert user['first_name'] == 'Tigist'
        assert 'last_name' not in user

    def test_backend_signup_logs_in(self, auth, http, session_store):
        http.request.side_effect = [
            make_response(201, {'phone_number': '+251922345678'}),
            make_response(200, {'access': 'acc', 'refresh': 'ref'}),
            make_response(200, {'id': 3, 'phone_number': '+251922345678'}),
        ]

        user = auth.signup('Tigist Haile', '+251922345678', 'pw')

        assert user['id'] == 3
        assert session_store.get_tokens() == ('acc', 'ref')


class TestLogoutAndRestore:
    """Tests for logout and session restore."""

    def test_logout_clears_session(self, offline_auth, session_store, navigator):
        offline_auth.login('+251911234567', 'pw')
        offline_auth.transport.get_bookings()

        offline_auth.logout()

        for key in SESSION_KEYS:
            assert session_store.get(key) is None
        assert offline_auth.current_user is None
        assert navigator.current_path == '/login'

    def test_profile_after_logout_falls_back_to_demo_user(self, offline_auth):
        offline_auth.login('+251911234567', 'pw')
        offline_auth.logout()

        profile = offline_auth.transport.get_user_profile()

        assert profile['first_name'] == 'Abebe'
        assert profile['last_name'] == 'Kebede'

    def test_restore_without_token(self, auth):
        assert auth.restore_session() is None

    def test_restore_prefers_demo_user(self, auth, http, session_store):
        session_store.set_tokens('demo_access_token_1', 'demo_refresh_token_1')
        session_store.set_json(DEMO_USER_KEY, {'id': 1, 'phone_number': '+251900'})

        assert auth.restore_session() == {'id': 1, 'phone_number': '+251900'}
        http.request.assert_not_called()

    def test_restore_with_corrupt_demo_user_ends_session(self, auth, session_store):
        session_store.set_tokens('demo_access_token_1', 'demo_refresh_token_1')
        session_store.set(DEMO_USER_KEY, '{broken')

        assert auth.restore_session() is None
        assert session_store.get_tokens() == (None, None)
        assert session_store.get(DEMO_USER_KEY) is None

    def test_restore_fetches_profile(self, auth, http, session_store):
        session_store.set_tokens('acc', 'ref')
        http.request.return_value = make_response(200, {'id': 5, 'phone_number': '+251955'})

        assert auth.restore_session() == {'id': 5, 'phone_number': '+251955'}
        assert auth.current_user['id'] == 5
