"""Chart payloads consumed by the dashboard front end."""
from __future__ import annotations

from pydantic import BaseModel


class PieChartData(BaseModel):
    """Simple representation for pie or doughnut charts."""

    title: str
    labels: list[str]
    values: list[float]
    hint: str | None = None


class ChartSeries(BaseModel):
    """One dataset in a multi-series chart."""

    label: str
    values: list[float]


class MultiSeriesChartData(BaseModel):
    """Representation of a grouped bar or multi-line chart."""

    title: str
    labels: list[str]
    datasets: list[ChartSeries]
    hint: str | None = None


class ReportCharts(BaseModel):
    monthly_hours: MultiSeriesChartData
    current_month_days: PieChartData
