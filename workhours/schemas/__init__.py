"""Pydantic schemas for response payloads."""

from .charts import ChartSeries, MultiSeriesChartData, PieChartData, ReportCharts
from .timesheet import (
    DailyEntryOut,
    ErrorOut,
    HomeOut,
    JobOut,
    ReportOut,
    SalariedEntryOut,
)

__all__ = [
    "ChartSeries",
    "DailyEntryOut",
    "ErrorOut",
    "HomeOut",
    "JobOut",
    "MultiSeriesChartData",
    "PieChartData",
    "ReportCharts",
    "ReportOut",
    "SalariedEntryOut",
]
