"""Database models for the work-hours domain."""
from __future__ import annotations

from .base import Base
from .entries import DailyEntry
from .jobs import Job
from .users import User

__all__ = [
    "Base",
    "DailyEntry",
    "Job",
    "User",
]
