"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from datetime import datetime
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from workhours.core import Settings, get_logger, get_settings
from workhours.core.log import init_logging, shutdown_logging
from workhours.core.security import SecurityProvider
from workhours.db import RecordStore
from workhours.exceptions import TimesheetError
from workhours.middleware import AuthMiddleware
from workhours.routers import (
    auth_router,
    dashboard_router,
    entries_router,
    jobs_router,
)
from workhours.services import TimesheetEngine

LOGGER = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    store: RecordStore | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The record store is connected on startup; an unreachable store aborts
    startup instead of serving requests that can only fail.
    """

    settings = settings or get_settings()
    init_logging(level=settings.log_level, log_dir=settings.log_dir)

    app = FastAPI(title="Work Hours Tracker", version="0.1.0")
    store = store or RecordStore(
        settings.database.sqlalchemy_url, echo=settings.sqlalchemy_echo
    )
    security_provider = SecurityProvider(settings.auth)

    app.state.store = store
    app.state.security = security_provider
    app.state.timesheet = TimesheetEngine(
        store,
        restrict_to_today=settings.timesheet.restrict_to_today,
        clock=clock,
    )

    app.add_middleware(AuthMiddleware, security_provider=security_provider)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(jobs_router)
    app.include_router(entries_router)

    @app.exception_handler(TimesheetError)
    async def timesheet_error_handler(request: Request, exc: TimesheetError) -> JSONResponse:
        LOGGER.warning(
            "Request failed: %s",
            exc.message,
            extra={"path": request.url.path, "error": type(exc).__name__},
        )
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.on_event("startup")
    def connect_store() -> None:
        try:
            store.connect()
        except TimesheetError:
            LOGGER.exception("Record store unavailable, aborting startup")
            raise

    @app.on_event("shutdown")
    def close_store() -> None:
        store.close()
        shutdown_logging()

    LOGGER.info(
        "FastAPI application initialised",
        extra={"restrict_to_today": settings.timesheet.restrict_to_today},
    )
    return app


app = create_app()
