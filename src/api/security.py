"""Session authentication: request interceptor, route gate and cookie helpers.

Requests pass through an ordered pipeline:

1. ``session_middleware`` resolves the session cookie to a User and stores it
   on ``request.state.user`` (None when anonymous). It never rejects.
2. ``require_user`` is attached to gated routes and short-circuits anonymous
   requests with a redirect to ``/login``.
"""

import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from api.config import Settings
from api.context import AppContext
from domain.model.user import User
from services import session_service

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def session_token(request: Request, settings: Settings) -> Optional[str]:
    """Return the verified session token from the request cookie, if any."""
    return session_service.unsign_token(
        settings.session_secret,
        request.cookies.get(settings.session_cookie_name),
        max_age=settings.session_max_age,
    )


def load_user(request: Request, context: AppContext) -> Optional[User]:
    token = session_token(request, context.settings)
    user_id = session_service.resolve_user_id(context.sessions, token)
    if not user_id:
        return None
    return context.users.get_by_id(user_id)


async def session_middleware(request: Request, call_next):
    """Attach the session user (or None) to ``request.state.user``."""
    context: Optional[AppContext] = getattr(request.app.state, "context", None)
    user = None
    if context is not None:
        # store lookups are blocking pymongo calls
        user = await run_in_threadpool(load_user, request, context)
    request.state.user = user
    return await call_next(request)


def get_current_user(request: Request) -> Optional[User]:
    """Current session user (optional). Returns None if anonymous."""
    return getattr(request.state, "user", None)


def require_user(request: Request) -> User:
    """Current session user (required). Redirects anonymous requests to /login."""
    user = get_current_user(request)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": LOGIN_PATH},
        )
    return user


def login_response(request: Request, context: AppContext, user: User, redirect_to: str) -> RedirectResponse:
    """Start a session for ``user`` and redirect with the session cookie set.

    Any session the browser already carried is ended first.

    Raises:
        StoreError: the session could not be persisted
    """
    settings = context.settings
    session_service.end_session(context.sessions, session_token(request, settings))
    session = session_service.start_session(context.sessions, user.id, settings.session_max_age)

    response = RedirectResponse(url=redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        session_service.sign_token(settings.session_secret, session.token),
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response


def logout_response(request: Request, context: AppContext, redirect_to: str) -> RedirectResponse:
    settings = context.settings
    session_service.end_session(context.sessions, session_token(request, settings))

    response = RedirectResponse(url=redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response
