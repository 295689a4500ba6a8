"""Service layer exposing the timesheet engine."""

from .timesheet import TimesheetEngine

__all__ = ["TimesheetEngine"]
