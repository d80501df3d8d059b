"""Scripted IdentityProvider for testing the federated login flow."""

from urllib.parse import urlencode

from domain.model.errors import ProviderError
from domain.model.identity import FederatedProfile


class FakeIdentityProvider:
    """Maps authorization codes to canned profiles.

    Unknown codes fail the way a real provider rejects a bad code.
    """

    def __init__(self, name: str, profiles: dict[str, FederatedProfile] | None = None):
        self.name = name
        self.profiles = dict(profiles or {})
        self.exchanged: list[tuple[str, str]] = []

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        query = urlencode({'redirect_uri': redirect_uri, 'state': state})
        return f"https://{self.name}.example/oauth/authorize?{query}"

    def fetch_profile(self, code: str, redirect_uri: str) -> FederatedProfile:
        self.exchanged.append((code, redirect_uri))
        profile = self.profiles.get(code)
        if profile is None:
            raise ProviderError(self.name, "invalid authorization code")
        return profile
