"""Jinja2 environment shared by the server-rendered pages."""

from pathlib import Path
from typing import Any

from fastapi import HTTPException, Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from cinearchive.admin.auth import is_admin
from cinearchive.services.storage import resolve_image_url

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["image_url"] = resolve_image_url


def render(request: Request, name: str, status_code: int = 200, **context: Any) -> Response:
    """Render a page; every template sees whether the visitor is an admin."""
    context.setdefault("is_admin", is_admin(request))
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def admin_required(request: Request) -> None:
    """Dependency for admin-only pages: send anonymous visitors to /login."""
    if not is_admin(request):
        raise HTTPException(
            status_code=302,
            detail="Login required",
            headers={"Location": f"/login?next={request.url.path}"},
        )
