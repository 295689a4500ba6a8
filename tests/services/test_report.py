"""Unit tests for the salary and chart aggregation."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from workhours.core.security import Principal
from workhours.db import RecordStore
from workhours.routers.dashboard import build_charts
from workhours.services import TimesheetEngine


class _Clock:
    """Clock whose current instant can be moved between calls."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _create_engine(clock: _Clock) -> tuple[TimesheetEngine, Principal]:
    store = RecordStore("sqlite://")
    store.connect()
    engine = TimesheetEngine(store, clock=clock)
    engine.register_user("alice", "a@x.com", "pw1")
    return engine, engine.authenticate("a@x.com", "pw1")


def test_salary_is_hours_times_rate() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))
    engine.add_job(principal, "A", "2024-05-01", "hourly", "10")
    engine.add_daily_entry(principal, "A", "2024-05-01", "09:00", "12:00")

    report = engine.compute_report(principal)

    [item] = report.entries
    assert item.calculated_salary == Decimal("30.00")
    assert report.monthly_hours_by_job["A"]["2024-05"] == 3
    assert report.salary_by_job == {"A": Decimal("30.00")}
    assert report.total_salary == Decimal("30.00")
    assert report.total_hours == Decimal("3.00")


def test_entry_without_matching_job_earns_nothing() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))
    engine.add_job(principal, "A", "2024-05-01", "hourly", "10")
    engine.add_daily_entry(principal, "Ghost", "2024-05-01", "09:00", "12:00")

    [item] = engine.compute_report(principal).entries

    assert item.entry.job_name == "Ghost"
    assert item.calculated_salary == 0


def test_salary_rounds_to_cents() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))
    engine.add_job(principal, "A", "2024-05-01", "hourly", "12.35")
    # 0.17 h * 12.35 = 2.0995
    engine.add_daily_entry(principal, "A", "2024-05-01", "09:00", "09:10")

    [item] = engine.compute_report(principal).entries

    assert item.calculated_salary == Decimal("2.10")


def test_monthly_hours_are_grouped_per_job_and_month() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))
    engine.add_job(principal, "A", "2024-04-01", "hourly", "10")
    engine.add_job(principal, "B", "2024-04-01", "fixed", "20")
    engine.add_daily_entry(principal, "A", "2024-04-30", "22:00", "06:00")
    engine.add_daily_entry(principal, "A", "2024-05-01", "09:00", "17:30")
    engine.add_daily_entry(principal, "A", "2024-05-02", "09:00", "10:00")
    engine.add_daily_entry(principal, "B", "2024-05-02", "09:00", "11:00")

    report = engine.compute_report(principal)

    assert report.monthly_hours_by_job == {
        "A": {"2024-04": Decimal("8.00"), "2024-05": Decimal("9.50")},
        "B": {"2024-05": Decimal("2.00")},
    }
    assert report.months == ["2024-04", "2024-05"]
    assert report.salary_by_job == {"A": Decimal("175.00"), "B": Decimal("40.00")}


def test_current_month_days_follow_the_clock_on_every_call() -> None:
    clock = _Clock(datetime(2024, 5, 20, 9, 0))
    engine, principal = _create_engine(clock)
    engine.add_daily_entry(principal, "A", "2024-05-01", "09:00", "10:00")
    engine.add_daily_entry(principal, "A", "2024-05-02", "09:00", "10:00")
    engine.add_daily_entry(principal, "B", "2024-06-01", "09:00", "10:00")
    engine.add_daily_entry(principal, "A", "2023-05-03", "09:00", "10:00")

    assert engine.compute_report(principal).current_month_day_count_by_job == {"A": 2}

    clock.now = datetime(2024, 6, 3, 8, 0)
    assert engine.compute_report(principal).current_month_day_count_by_job == {"B": 1}


def test_report_for_new_user_is_empty() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))

    report = engine.compute_report(principal)

    assert report.entries == []
    assert report.monthly_hours_by_job == {}
    assert report.current_month_day_count_by_job == {}
    assert report.total_salary == 0


def test_charts_are_built_from_the_report() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))
    engine.add_daily_entry(principal, "A", "2024-04-30", "09:00", "10:00")
    engine.add_daily_entry(principal, "B", "2024-05-02", "09:00", "11:00")

    charts = build_charts(engine.compute_report(principal))

    assert charts.monthly_hours.labels == ["2024-04", "2024-05"]
    assert [(series.label, series.values) for series in charts.monthly_hours.datasets] == [
        ("A", [1.0, 0.0]),
        ("B", [0.0, 2.0]),
    ]
    assert charts.current_month_days.labels == ["B"]
    assert charts.current_month_days.values == [1.0]
    assert charts.current_month_days.title == "Days worked in May 2024"


def test_charts_use_placeholders_without_data() -> None:
    engine, principal = _create_engine(_Clock(datetime(2024, 5, 20, 9, 0)))

    charts = build_charts(engine.compute_report(principal))

    assert charts.monthly_hours.labels == ["No data"]
    assert charts.monthly_hours.datasets == []
    assert charts.current_month_days.labels == ["No data"]
