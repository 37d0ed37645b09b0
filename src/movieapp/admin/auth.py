"""SQLAdmin authentication backend."""

import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from movieapp.config import settings


class AdminAuth(AuthenticationBackend):
    """Single username/password login stored in the signed session cookie."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        if not settings.admin_password:
            return False
        ok = secrets.compare_digest(
            str(form.get("username", "")), settings.admin_username
        ) and secrets.compare_digest(str(form.get("password", "")), settings.admin_password)
        if ok:
            request.session.update({"authenticated": True})
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("authenticated", False)
