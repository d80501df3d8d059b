"""Federated login routes.

Endpoints:
- GET /auth/{provider}          start the authorization-code handshake
- GET /auth/{provider}/secrets  provider callback

Providers are only present in the context under AUTH_STRATEGY=federated
with both credentials configured; anything else redirects to /login.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from api.context import AppContext
from api.dependencies import get_context
from api.security import login_response
from domain.model.errors import DomainError
from services import auth_service, oauth_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["oauth"])

CALLBACK_ROUTE_NAME = "oauth_callback"


def _redirect_to_login() -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)


def _callback_uri(request: Request, context: AppContext, provider: str) -> str:
    """Callback URL registered with the provider.

    OAUTH_REDIRECT_BASE_URL wins when set (needed behind proxies); otherwise
    it is derived from the incoming request.
    """
    base = context.settings.oauth_redirect_base_url
    if base:
        return f"{base.rstrip('/')}/auth/{provider}/secrets"
    return str(request.url_for(CALLBACK_ROUTE_NAME, provider=provider))


@router.get("/{provider}")
def start(provider: str, request: Request, context: AppContext = Depends(get_context)):
    identity_provider = context.providers.get(provider)
    if identity_provider is None:
        logger.warning("Federated login unavailable", extra={"provider": provider})
        return _redirect_to_login()

    state = oauth_state.create_state(context.settings.session_secret, provider)
    url = identity_provider.authorization_url(_callback_uri(request, context, provider), state)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/{provider}/secrets", name=CALLBACK_ROUTE_NAME)
def callback(
    provider: str,
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    context: AppContext = Depends(get_context),
):
    identity_provider = context.providers.get(provider)
    if identity_provider is None:
        logger.warning("Callback for unavailable provider", extra={"provider": provider})
        return _redirect_to_login()

    if error:
        logger.warning("Provider denied authorization", extra={"provider": provider, "reason": error})
        return _redirect_to_login()

    try:
        oauth_state.validate_state(context.settings.session_secret, state, provider)
        profile = identity_provider.fetch_profile(code or "", _callback_uri(request, context, provider))
        user = auth_service.login_with_provider(context.users, profile)
        return login_response(request, context, user, "/secrets")
    except DomainError as e:
        logger.warning("Federated login failed", extra={
            "provider": provider, "reason": str(e), "errorType": type(e).__name__,
        })
        return _redirect_to_login()
