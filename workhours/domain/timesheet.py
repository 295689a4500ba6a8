"""Immutable views of timesheet records and the derived report."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Mapping, Sequence


@dataclass(frozen=True, slots=True)
class JobRecord:
    """A job as read from the store."""

    id: int
    job_name: str
    job_date: date
    salary_type: str
    salary_amount: Decimal
    created_at: datetime

    @classmethod
    def from_row(cls, row: object) -> "JobRecord":
        return cls(
            id=int(getattr(row, "id")),
            job_name=str(getattr(row, "job_name")),
            job_date=getattr(row, "job_date"),
            salary_type=str(getattr(row, "salary_type")),
            salary_amount=Decimal(str(getattr(row, "salary_amount"))),
            created_at=getattr(row, "created_at"),
        )


@dataclass(frozen=True, slots=True)
class DailyEntryRecord:
    """One logged shift as read from the store."""

    id: int
    job_name: str
    entry_date: date
    start_time: time
    end_time: time
    total_hours: Decimal
    created_at: datetime

    @property
    def month_key(self) -> str:
        """Return the ``YYYY-MM`` bucket the entry belongs to."""

        return self.entry_date.strftime("%Y-%m")

    @classmethod
    def from_row(cls, row: object) -> "DailyEntryRecord":
        return cls(
            id=int(getattr(row, "id")),
            job_name=str(getattr(row, "job_name")),
            entry_date=getattr(row, "entry_date"),
            start_time=getattr(row, "start_time"),
            end_time=getattr(row, "end_time"),
            total_hours=Decimal(str(getattr(row, "total_hours"))),
            created_at=getattr(row, "created_at"),
        )


@dataclass(frozen=True, slots=True)
class SalariedEntry:
    entry: DailyEntryRecord
    calculated_salary: Decimal


@dataclass(frozen=True, slots=True)
class Report:
    """On-demand aggregation of a user's entries; never persisted."""

    generated_at: datetime
    jobs: Sequence[JobRecord]
    entries: Sequence[SalariedEntry]
    monthly_hours_by_job: Mapping[str, Mapping[str, Decimal]]
    current_month_day_count_by_job: Mapping[str, int]
    salary_by_job: Mapping[str, Decimal] = field(default_factory=dict)
    total_salary: Decimal = Decimal("0.00")
    total_hours: Decimal = Decimal("0.00")

    @property
    def months(self) -> list[str]:
        """Return every month present in the report, oldest first."""

        keys = {month for per_job in self.monthly_hours_by_job.values() for month in per_job}
        return sorted(keys)


@dataclass(frozen=True, slots=True)
class Home:
    username: str
    jobs: Sequence[JobRecord]
    entries: Sequence[DailyEntryRecord]
