"""Shared OAuth 2.0 authorization-code client built on httpx."""

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from domain.model.errors import ProviderError
from domain.model.identity import FederatedProfile

logger = logging.getLogger(__name__)

API_TIMEOUT_SECONDS = 10.0


class OAuth2IdentityProvider:
    """Base class for providers speaking the authorization-code grant.

    Subclasses set the endpoint URLs and scopes, and turn the provider's
    profile payload into a FederatedProfile.
    """

    name: str = ''
    authorize_url: str = ''
    token_url: str = ''
    profile_url: str = ''
    scopes: tuple[str, ...] = ()
    scope_separator: str = ' '

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: httpx.BaseTransport | None = None,
        timeout: float = API_TIMEOUT_SECONDS,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self._transport = transport
        self._timeout = timeout

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        params = {
            'client_id': self.client_id,
            'redirect_uri': redirect_uri,
            'response_type': 'code',
            'scope': self.scope_separator.join(self.scopes),
            'state': state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    def fetch_profile(self, code: str, redirect_uri: str) -> FederatedProfile:
        if not code:
            raise ProviderError(self.name, "missing authorization code")

        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            access_token = self._exchange_code(client, code, redirect_uri)
            data = self._get_profile(client, access_token)

        profile = self._parse_profile(data)
        logger.info("Fetched federated profile", extra={"provider": self.name})
        return profile

    # ── hooks ────────────────────────────────────────────────

    def _exchange_code(self, client: httpx.Client, code: str, redirect_uri: str) -> str:
        data = self._request(client, 'POST', self.token_url, data={
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'code': code,
            'grant_type': 'authorization_code',
            'redirect_uri': redirect_uri,
        })
        return self._access_token(data)

    def _get_profile(self, client: httpx.Client, access_token: str) -> dict[str, Any]:
        return self._request(client, 'GET', self.profile_url, headers={
            'Authorization': f'Bearer {access_token}',
        })

    def _parse_profile(self, data: dict[str, Any]) -> FederatedProfile:
        raise NotImplementedError

    # ── helpers ──────────────────────────────────────────────

    def _access_token(self, data: dict[str, Any]) -> str:
        token = data.get('access_token')
        if not token:
            raise ProviderError(self.name, "token response did not include an access_token")
        return token

    def _request(self, client: httpx.Client, method: str, url: str, **kwargs) -> dict[str, Any]:
        try:
            response = client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"request to {url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected response payload")
        if response.status_code >= 400 or 'error' in data:
            raise ProviderError(self.name, _describe_error(response.status_code, data))
        return data


def _describe_error(status_code: int, data: Any) -> str:
    error = data.get('error') if isinstance(data, dict) else None
    if isinstance(error, dict):
        # Graph API style: {"error": {"message": ..., "code": ...}}
        return f"HTTP {status_code}: {error.get('message') or error}"
    if error:
        description = data.get('error_description')
        return f"HTTP {status_code}: {error}" + (f" ({description})" if description else "")
    return f"HTTP {status_code}"
