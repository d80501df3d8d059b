from typing import Protocol
from domain.model.identity import FederatedProfile


class IdentityProvider(Protocol):
    """OAuth 2.0 authorization-code client for one external provider."""
    name: str

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """URL the browser is sent to in order to grant access."""
        ...

    def fetch_profile(self, code: str, redirect_uri: str) -> FederatedProfile:
        """Exchange an authorization code for the user's profile.

        Raises ProviderError on any failure.
        """
        ...
