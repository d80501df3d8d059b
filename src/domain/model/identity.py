"""Federated identity types shared by the OAuth adapters and the auth service."""

from dataclasses import dataclass

GOOGLE = 'google'
FACEBOOK = 'facebook'

# provider name -> User attribute / document field holding the provider-scoped id
PROVIDER_FIELDS = {
    GOOGLE: 'google_id',
    FACEBOOK: 'facebook_id',
}


def provider_field(provider: str) -> str:
    """Return the user field for a provider, raising KeyError for unknown ones."""
    return PROVIDER_FIELDS[provider]


@dataclass(frozen=True)
class FederatedProfile:
    """Profile returned by an identity provider after a successful handshake."""
    provider: str
    provider_id: str
    name: str | None = None
    email: str | None = None
