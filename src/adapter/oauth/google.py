"""Google OAuth 2.0 / OpenID Connect identity provider."""

from typing import Any

from adapter.oauth.base import OAuth2IdentityProvider
from domain.model.errors import ProviderError
from domain.model.identity import GOOGLE, FederatedProfile


class GoogleIdentityProvider(OAuth2IdentityProvider):
    name = GOOGLE
    authorize_url = 'https://accounts.google.com/o/oauth2/v2/auth'
    token_url = 'https://oauth2.googleapis.com/token'
    profile_url = 'https://www.googleapis.com/oauth2/v3/userinfo'
    scopes = ('openid', 'profile', 'email')

    def _parse_profile(self, data: dict[str, Any]) -> FederatedProfile:
        subject = data.get('sub')
        if not subject:
            raise ProviderError(self.name, "profile did not include a subject id")
        return FederatedProfile(
            provider=self.name,
            provider_id=str(subject),
            name=data.get('name'),
            email=data.get('email'),
        )
