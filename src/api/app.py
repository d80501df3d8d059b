"""FastAPI application factory."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI

from api.config import Settings
from api.context import AppContext, build_context
from api.routes import auth, health, oauth, pages, secrets
from api.security import session_middleware

logger = logging.getLogger(__name__)

SERVICE_NAME = "Secrets"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _read_version() -> str:
    # pyproject.toml is the single source of truth; absent in non-editable installs
    if not _PYPROJECT.exists():
        return "0.0.0"
    with open(_PYPROJECT, "rb") as f:
        return tomllib.load(f)["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the context on startup unless one was injected; close it on shutdown."""
    if app.state.context is None:
        app.state.context = build_context(app.state.settings)
        if app.state.context is None:
            logger.warning("MongoDB unavailable, requests needing the store will get 503")

    yield  # App runs here

    if app.state.context is not None:
        app.state.context.close()


def create_app(settings: Settings, context: AppContext | None = None) -> FastAPI:
    """Create the application.

    Passing ``context`` skips the MongoDB wiring, which is how tests run the
    app against in-memory adapters.
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="Register, log in and share a secret",
        version=_read_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.context = context

    app.middleware("http")(session_middleware)

    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(secrets.router)
    app.include_router(oauth.router)
    app.include_router(health.router)
    return app
