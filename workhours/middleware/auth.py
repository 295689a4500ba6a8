"""Middleware that resolves the session cookie into a principal."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from workhours.core.logger import get_logger, log_context
from workhours.core.security import AuthenticationError, Principal, SecurityProvider

LOGGER = get_logger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Redirect unauthenticated requests to the login page."""

    def __init__(
        self,
        app,
        security_provider: SecurityProvider,
        *,
        login_path: str = "/login",
        register_path: str = "/register",
        logout_path: str = "/logout",
        exempt_paths: Iterable[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._security_provider = security_provider
        self._login_path = login_path
        self._exempt_paths = set(exempt_paths or ()) | {login_path, register_path, logout_path}

    def _is_exempt(self, path: str) -> bool:
        """Return ``True`` when the request path should bypass authentication."""

        if path in self._exempt_paths:
            return True
        return path in {"/openapi.json", "/docs", "/redoc", "/favicon.ico"}

    def _redirect_to_login(self, *, clear_cookie: bool) -> Response:
        response = RedirectResponse(self._login_path, status_code=303)
        if clear_cookie:
            response.delete_cookie(self._security_provider.cookie_name)
        return response

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        token = request.cookies.get(self._security_provider.cookie_name)
        principal: Principal | None = None
        invalid_token = False

        if token:
            try:
                principal = self._security_provider.decode_token(token)
            except AuthenticationError as exc:
                LOGGER.info("Failed to decode access token", extra={"reason": str(exc)})
                invalid_token = True

        request.state.user = principal
        path = request.url.path

        if self._is_exempt(path):
            response = await call_next(request)
            if invalid_token:
                response.delete_cookie(self._security_provider.cookie_name)
            return response

        if principal is None:
            return self._redirect_to_login(clear_cookie=bool(token))

        with log_context.bound(user=principal.username):
            return await call_next(request)


__all__ = ["AuthMiddleware"]
