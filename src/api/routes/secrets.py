"""Secret listing and submission routes, all gated on an authenticated session."""

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from api.dependencies import get_user_repo
from api.rendering import render
from api.security import require_user
from domain.model.errors import DomainError
from domain.model.user import User
from port.user_repository import UserRepository
from services import secret_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["secrets"])


@router.get("/secrets", response_class=HTMLResponse)
def secrets_page(
    request: Request,
    user: User = Depends(require_user),
    repo: UserRepository = Depends(get_user_repo),
):
    """List every user's non-empty secret."""
    return render(request, "secrets.html", {"secrets": secret_service.list_secrets(repo)})


@router.get("/submit", response_class=HTMLResponse)
def submit_form(request: Request, user: User = Depends(require_user)):
    return render(request, "submit.html")


@router.post("/submit")
def submit(
    secret: str = Form(""),
    user: User = Depends(require_user),
    repo: UserRepository = Depends(get_user_repo),
):
    """Overwrite the current user's secret."""
    try:
        secret_service.submit_secret(repo, user, secret)
    except DomainError as e:
        logger.warning("Secret submission failed", extra={"userId": user.id, "reason": str(e)})
        return RedirectResponse(url="/submit", status_code=status.HTTP_303_SEE_OTHER)
    return RedirectResponse(url="/secrets", status_code=status.HTTP_303_SEE_OTHER)
