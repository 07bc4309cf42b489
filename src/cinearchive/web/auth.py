"""Login and logout for the site's admin controls."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.responses import Response

from cinearchive.admin.auth import log_in
from cinearchive.web.templating import render

router = APIRouter(tags=["auth"])


def _safe_next(target: str | None) -> str:
    # Only same-site paths
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return "/"


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request, next: str | None = None) -> Response:
    return render(request, "login.html", next=_safe_next(next))


@router.post("/login")
async def login(request: Request) -> Response:
    form = await request.form()
    target = _safe_next(form.get("next"))
    if log_in(request, form.get("username"), form.get("password")):
        return RedirectResponse(target, status_code=303)
    return render(
        request,
        "login.html",
        status_code=401,
        next=target,
        error="Invalid username or password",
    )


@router.post("/logout")
async def logout(request: Request) -> Response:
    request.session.clear()
    return RedirectResponse("/", status_code=303)
