"""Facebook Login identity provider (Graph API)."""

from typing import Any

import httpx

from adapter.oauth.base import OAuth2IdentityProvider
from domain.model.errors import ProviderError
from domain.model.identity import FACEBOOK, FederatedProfile

GRAPH_VERSION = 'v19.0'
GRAPH_BASE = f'https://graph.facebook.com/{GRAPH_VERSION}'


class FacebookIdentityProvider(OAuth2IdentityProvider):
    name = FACEBOOK
    authorize_url = f'https://www.facebook.com/{GRAPH_VERSION}/dialog/oauth'
    token_url = f'{GRAPH_BASE}/oauth/access_token'
    profile_url = f'{GRAPH_BASE}/me'
    scopes = ('public_profile', 'email')
    scope_separator = ','

    def _exchange_code(self, client: httpx.Client, code: str, redirect_uri: str) -> str:
        data = self._request(client, 'GET', self.token_url, params={
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'code': code,
            'redirect_uri': redirect_uri,
        })
        return self._access_token(data)

    def _get_profile(self, client: httpx.Client, access_token: str) -> dict[str, Any]:
        return self._request(client, 'GET', self.profile_url, params={
            'fields': 'id,name,email',
            'access_token': access_token,
        })

    def _parse_profile(self, data: dict[str, Any]) -> FederatedProfile:
        user_id = data.get('id')
        if not user_id:
            raise ProviderError(self.name, "profile did not include an id")
        return FederatedProfile(
            provider=self.name,
            provider_id=str(user_id),
            name=data.get('name'),
            email=data.get('email'),
        )
