"""Landing page payload and the salary report with chart data."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from workhours.core.logger import get_logger
from workhours.core.security import Principal, get_principal
from workhours.dependencies import get_engine
from workhours.domain import Report
from workhours.schemas import (
    ChartSeries,
    HomeOut,
    MultiSeriesChartData,
    PieChartData,
    ReportCharts,
    ReportOut,
)
from workhours.services import TimesheetEngine

LOGGER = get_logger(__name__)
router = APIRouter(tags=["dashboard"])


def _build_pie_chart(title: str, items: list[tuple[str, float]], hint: str | None = None) -> PieChartData:
    labels = [label for label, value in items if value]
    values = [float(value) for _, value in items if value]
    if not labels:
        return PieChartData(title=title, labels=["No data"], values=[0], hint=hint)
    return PieChartData(title=title, labels=labels, values=values, hint=hint)


def _build_monthly_chart(report: Report) -> MultiSeriesChartData:
    months = report.months
    datasets = [
        ChartSeries(
            label=job_name,
            values=[float(per_month.get(month, 0)) for month in months],
        )
        for job_name, per_month in sorted(report.monthly_hours_by_job.items())
    ]
    if not months:
        months = ["No data"]
    return MultiSeriesChartData(
        title="Hours per job per month",
        labels=months,
        datasets=datasets,
        hint="Total logged hours grouped by calendar month",
    )


def build_charts(report: Report) -> ReportCharts:
    days = sorted(report.current_month_day_count_by_job.items())
    return ReportCharts(
        monthly_hours=_build_monthly_chart(report),
        current_month_days=_build_pie_chart(
            f"Days worked in {report.generated_at:%B %Y}",
            [(job_name, float(count)) for job_name, count in days],
        ),
    )


@router.get("/", response_model=HomeOut)
def home(
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> HomeOut:
    return HomeOut.from_home(engine.home(principal))


@router.get("/report", response_model=ReportOut)
def report(
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> ReportOut:
    """Return salary totals and chart-ready summaries for the current user."""

    result = engine.compute_report(principal)
    LOGGER.debug("Report computed", extra={"entries": len(result.entries)})
    return ReportOut.from_report(result, build_charts(result))


__all__ = ["build_charts", "router"]
