from fastapi import Depends, HTTPException, Request

from api.config import Settings
from api.context import AppContext
from port.password_hasher import PasswordHasher
from port.session_repository import SessionRepository
from port.user_repository import UserRepository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_context(request: Request) -> AppContext:
    """Get the application context, raising 503 if the database never came up."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return context


def get_user_repo(context: AppContext = Depends(get_context)) -> UserRepository:
    return context.users


def get_session_repo(context: AppContext = Depends(get_context)) -> SessionRepository:
    return context.sessions


def get_password_hasher(context: AppContext = Depends(get_context)) -> PasswordHasher:
    return context.hasher
