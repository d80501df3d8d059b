"""Route tests for the federated login handshake."""

import unittest
from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient
from api.app import create_app
from api.config import AuthStrategy, Settings
from api.context import AppContext
from adapter.fake.identity_provider import FakeIdentityProvider
from adapter.fake.session_repository import FakeSessionRepository
from adapter.fake.user_repository import FakeUserRepository
from adapter.password.plaintext import PlaintextPasswordHasher
from domain.model.identity import FederatedProfile
from services import oauth_state


ALICE_GOOGLE = FederatedProfile(provider="google", provider_id="g-123", name="Alice", email="alice@example.com")
ALICE_FACEBOOK = FederatedProfile(provider="facebook", provider_id="fb-9", name="Alice")


class TestOAuthRoutes(unittest.TestCase):
    """Test cases for /auth/{provider} and its callback."""

    def setUp(self):
        self.settings = Settings(session_secret="test-secret", auth_strategy=AuthStrategy.FEDERATED)
        self.users = FakeUserRepository()
        self.google = FakeIdentityProvider("google", {"code-1": ALICE_GOOGLE, "code-2": ALICE_GOOGLE})
        self.facebook = FakeIdentityProvider("facebook", {"code-fb": ALICE_FACEBOOK})
        self.context = AppContext(
            settings=self.settings,
            users=self.users,
            sessions=FakeSessionRepository(),
            hasher=PlaintextPasswordHasher(),
            providers={"google": self.google, "facebook": self.facebook},
        )
        self.client = TestClient(create_app(self.settings, self.context), follow_redirects=False)

    def _state(self, provider="google"):
        return oauth_state.create_state(self.settings.session_secret, provider)

    def _callback(self, code, provider="google", state=None):
        state = state if state is not None else self._state(provider)
        return self.client.get(f"/auth/{provider}/secrets", params={"code": code, "state": state})

    def test_start_redirects_to_provider_with_state(self):
        response = self.client.get("/auth/google")

        self.assertEqual(response.status_code, 302)
        location = urlparse(response.headers["location"])
        self.assertEqual(location.netloc, "google.example")
        query = parse_qs(location.query)
        self.assertEqual(query["redirect_uri"], ["http://testserver/auth/google/secrets"])
        # the issued state must validate for the same provider
        oauth_state.validate_state(self.settings.session_secret, query["state"][0], "google")

    def test_start_uses_configured_redirect_base(self):
        self.context.settings = Settings(
            session_secret="test-secret",
            oauth_redirect_base_url="https://secrets.example.com/",
        )

        response = self.client.get("/auth/facebook")

        query = parse_qs(urlparse(response.headers["location"]).query)
        self.assertEqual(query["redirect_uri"], ["https://secrets.example.com/auth/facebook/secrets"])

    def test_unknown_provider_redirects_to_login(self):
        response = self.client.get("/auth/github")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login")

    def test_callback_creates_user_and_session(self):
        response = self._callback("code-1")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/secrets")
        self.assertEqual(len(self.users.store), 1)
        user = next(iter(self.users.store.values()))
        self.assertEqual(user.google_id, "g-123")
        self.assertIsNone(user.password)

        response = self.client.get("/secrets")
        self.assertEqual(response.status_code, 200)

    def test_repeated_federated_login_reuses_user(self):
        self._callback("code-1")
        first_id = next(iter(self.users.store))
        self.client.get("/logout")

        self._callback("code-2")

        self.assertEqual(list(self.users.store), [first_id])

    def test_providers_create_distinct_users(self):
        self._callback("code-1")
        self._callback("code-fb", provider="facebook")

        self.assertEqual(len(self.users.store), 2)

    def test_provider_denial_redirects_to_login(self):
        response = self.client.get("/auth/google/secrets", params={"error": "access_denied"})

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login")
        self.assertEqual(self.google.exchanged, [])

    def test_invalid_code_redirects_to_login(self):
        response = self._callback("bogus")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login")
        self.assertEqual(self.users.store, {})

    def test_forged_state_redirects_to_login(self):
        response = self._callback("code-1", state="forged")

        self.assertEqual(response.headers["location"], "/login")
        self.assertEqual(self.google.exchanged, [])

    def test_state_for_other_provider_is_rejected(self):
        response = self._callback("code-1", state=self._state("facebook"))

        self.assertEqual(response.headers["location"], "/login")
        self.assertEqual(self.users.store, {})

    def test_federated_user_can_submit_secret(self):
        self._callback("code-1")

        self.client.post("/submit", data={"secret": "hello"})

        user = next(iter(self.users.store.values()))
        self.assertEqual(user.secret, "hello")


class TestOAuthDisabled(unittest.TestCase):
    """Without providers in the context every federated route falls back to /login."""

    def setUp(self):
        settings = Settings(session_secret="test-secret", auth_strategy=AuthStrategy.HASHED)
        context = AppContext(
            settings=settings,
            users=FakeUserRepository(),
            sessions=FakeSessionRepository(),
            hasher=PlaintextPasswordHasher(),
        )
        self.client = TestClient(create_app(settings, context), follow_redirects=False)

    def test_start_redirects_to_login(self):
        response = self.client.get("/auth/google")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login")

    def test_callback_redirects_to_login(self):
        response = self.client.get("/auth/google/secrets", params={"code": "x", "state": "y"})

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/login")


if __name__ == '__main__':
    unittest.main()
