"""Repositories over the record store."""

from .base import BaseRepository
from .timesheet import DailyEntryRepository, JobRepository, UserRepository

__all__ = [
    "BaseRepository",
    "DailyEntryRepository",
    "JobRepository",
    "UserRepository",
]
