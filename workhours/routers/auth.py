"""Registration, login and logout routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from workhours.core.logger import get_logger
from workhours.core.security import Principal, SecurityProvider
from workhours.dependencies import get_engine, get_security
from workhours.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from workhours.routers.views import auth_form_error
from workhours.services import TimesheetEngine

LOGGER = get_logger(__name__)
router = APIRouter(tags=["auth"])


def _form_descriptor(request: Request, form: str) -> Response:
    user: Principal | None = getattr(request.state, "user", None)
    if user is not None:
        LOGGER.debug("User already authenticated", extra={"username": user.username})
        return RedirectResponse("/", status_code=303)
    return JSONResponse({"form": form, "error": None})


@router.get("/register", include_in_schema=False)
async def register_form(request: Request) -> Response:
    return _form_descriptor(request, "register")


@router.post("/register")
def register_submit(
    username: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    engine: TimesheetEngine = Depends(get_engine),
) -> Response:
    """Create an account, then send the user to the login form."""

    try:
        engine.register_user(username, email, password)
    except (ValidationError, DuplicateEmailError) as exc:
        return auth_form_error("register", exc)
    return RedirectResponse("/login", status_code=303)


@router.get("/login", include_in_schema=False)
async def login_form(request: Request) -> Response:
    return _form_descriptor(request, "login")


@router.post("/login")
def login_submit(
    email: str = Form(""),
    password: str = Form(""),
    engine: TimesheetEngine = Depends(get_engine),
    security: SecurityProvider = Depends(get_security),
) -> Response:
    """Verify credentials and issue the session cookie."""

    try:
        principal = engine.authenticate(email, password)
    except InvalidCredentialsError as exc:
        LOGGER.info("Invalid login attempt")
        return auth_form_error("login", exc)

    response = RedirectResponse("/", status_code=303)
    response.set_cookie(
        security.cookie_name,
        security.create_access_token(principal),
        max_age=security.token_ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    LOGGER.info("User logged in", extra={"username": principal.username})
    return response


@router.get("/logout", include_in_schema=False)
async def logout(security: SecurityProvider = Depends(get_security)) -> Response:
    """Clear the session cookie and redirect to the login page."""

    response = RedirectResponse("/login", status_code=303)
    response.delete_cookie(security.cookie_name)
    return response


__all__ = ["router"]
