"""Shared FastAPI dependency definitions."""
from __future__ import annotations

from fastapi import Request

from workhours.core.security import SecurityProvider
from workhours.services import TimesheetEngine


def get_engine(request: Request) -> TimesheetEngine:
    """Return the engine created for this application instance."""

    return request.app.state.timesheet


def get_security(request: Request) -> SecurityProvider:
    return request.app.state.security
