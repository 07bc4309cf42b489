"""Admin credential check and the SQLAdmin authentication backend."""

import logging

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from cinearchive.config import settings

logger = logging.getLogger(__name__)

SESSION_KEY = "authenticated"


def check_credentials(username: str | None, password: str | None) -> bool:
    """True when the pair matches the configured admin account."""
    return username == settings.admin_username and password == settings.admin_password


def is_admin(request: Request) -> bool:
    return bool(request.session.get(SESSION_KEY, False))


def log_in(request: Request, username: str | None, password: str | None) -> bool:
    """Mark the session as admin if the credentials match."""
    ok = check_credentials(username, password)
    if ok:
        request.session.update({SESSION_KEY: True})
        logger.info(f"Admin login for {username!r}")
    else:
        logger.warning(f"Rejected admin login for {username!r}")
    return ok


class AdminAuth(AuthenticationBackend):
    async def login(self, request: Request) -> bool:
        form = await request.form()
        return log_in(request, form.get("username"), form.get("password"))

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return is_admin(request)
