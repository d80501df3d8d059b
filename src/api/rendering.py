from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, template_name: str, ctx: dict | None = None):
    """TemplateResponse wrapper injecting the session user and enabled providers."""
    context = getattr(request.app.state, "context", None)
    base_ctx = {
        "current_user": getattr(request.state, "user", None),
        "providers": sorted(context.providers) if context is not None else [],
    }
    return templates.TemplateResponse(request, template_name, {**base_ctx, **(ctx or {})})
