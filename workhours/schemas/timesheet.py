"""Response payloads for jobs, daily entries and reports."""
from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer

from workhours.domain import DailyEntryRecord, Home, JobRecord, Report

from .charts import ReportCharts


class JobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    job_name: str
    job_date: date
    salary_type: str
    salary_amount: Decimal
    created_at: datetime

    @field_serializer("salary_amount")
    def serialize_salary_amount(self, value: Decimal) -> str:
        return str(value)


class DailyEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    job_name: str
    entry_date: date
    start_time: time
    end_time: time
    total_hours: Decimal
    created_at: datetime

    @field_serializer("start_time", "end_time")
    def serialize_clock(self, value: time) -> str:
        if value.second or value.microsecond:
            return value.isoformat()
        return value.strftime("%H:%M")

    @field_serializer("total_hours")
    def serialize_total_hours(self, value: Decimal) -> str:
        return str(value)


class SalariedEntryOut(DailyEntryOut):
    calculated_salary: Decimal

    @field_serializer("calculated_salary")
    def serialize_calculated_salary(self, value: Decimal) -> str:
        return str(value)


class HomeOut(BaseModel):
    """Everything the landing page shows in one payload."""

    username: str
    jobs: list[JobOut]
    daily_jobs: list[DailyEntryOut]

    @classmethod
    def from_home(cls, home: Home) -> "HomeOut":
        return cls(
            username=home.username,
            jobs=[JobOut.model_validate(job) for job in home.jobs],
            daily_jobs=[DailyEntryOut.model_validate(entry) for entry in home.entries],
        )


class ReportOut(BaseModel):
    generated_at: datetime
    jobs: list[JobOut]
    entries: list[SalariedEntryOut]
    monthly_hours_by_job: dict[str, dict[str, float]]
    current_month_day_count_by_job: dict[str, int]
    salary_by_job: dict[str, Decimal]
    total_salary: Decimal
    total_hours: Decimal
    charts: ReportCharts

    @field_serializer("salary_by_job")
    def serialize_salary_by_job(self, value: dict[str, Decimal]) -> dict[str, str]:
        return {job: str(amount) for job, amount in value.items()}

    @field_serializer("total_salary", "total_hours")
    def serialize_totals(self, value: Decimal) -> str:
        return str(value)

    @classmethod
    def from_report(cls, report: Report, charts: ReportCharts) -> "ReportOut":
        return cls(
            generated_at=report.generated_at,
            jobs=[JobOut.model_validate(job) for job in report.jobs],
            entries=[
                SalariedEntryOut(
                    **asdict(item.entry),
                    calculated_salary=item.calculated_salary,
                )
                for item in report.entries
            ],
            monthly_hours_by_job={
                job: {month: float(hours) for month, hours in months.items()}
                for job, months in report.monthly_hours_by_job.items()
            },
            current_month_day_count_by_job=dict(report.current_month_day_count_by_job),
            salary_by_job=dict(report.salary_by_job),
            total_salary=report.total_salary,
            total_hours=report.total_hours,
            charts=charts,
        )


class ErrorOut(BaseModel):
    """Error payload; ``jobs`` lets a form view re-render without refetching."""

    error: str
    form: str | None = None
    jobs: list[JobOut] | None = None


__all__ = [
    "DailyEntryOut",
    "ErrorOut",
    "HomeOut",
    "JobOut",
    "ReportOut",
    "SalariedEntryOut",
]
