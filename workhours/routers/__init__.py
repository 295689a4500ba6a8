"""FastAPI routers for the work-hours application."""

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .entries import router as entries_router
from .jobs import router as jobs_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "entries_router",
    "jobs_router",
]
