"""Local authentication routes (register, login, logout).

Every failure is logged and redirected back to the form it came from.
Handlers are plain ``def`` so password hashing and store calls run in
FastAPI's threadpool instead of blocking the event loop.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse

from api.context import AppContext
from api.dependencies import get_context
from api.security import login_response, logout_response
from domain.model.errors import DomainError
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SECRETS_PATH = "/secrets"


@router.post("/register")
def register(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    context: AppContext = Depends(get_context),
):
    """Create a local account and log it in."""
    try:
        user = auth_service.register(context.users, context.hasher, username, password)
        return login_response(request, context, user, SECRETS_PATH)
    except DomainError as e:
        logger.warning("Registration failed", extra={
            "username": username, "reason": str(e), "errorType": type(e).__name__,
        })
        return RedirectResponse(url="/register", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/login")
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    context: AppContext = Depends(get_context),
):
    """Verify local credentials and start a session."""
    try:
        user = auth_service.authenticate(context.users, context.hasher, username, password)
        response = login_response(request, context, user, SECRETS_PATH)
    except DomainError as e:
        logger.warning("Login failed", extra={
            "username": username, "reason": str(e), "errorType": type(e).__name__,
        })
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)

    logger.info("User logged in", extra={"userId": user.id, "username": user.username})
    return response


@router.get("/logout")
def logout(request: Request, context: AppContext = Depends(get_context)):
    return logout_response(request, context, "/")
