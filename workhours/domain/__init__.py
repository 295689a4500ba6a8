"""Domain values and arithmetic for the timesheet engine."""

from .duration import duration, parse_date, parse_time, round_hours
from .timesheet import DailyEntryRecord, Home, JobRecord, Report, SalariedEntry

__all__ = [
    "DailyEntryRecord",
    "Home",
    "JobRecord",
    "Report",
    "SalariedEntry",
    "duration",
    "parse_date",
    "parse_time",
    "round_hours",
]
