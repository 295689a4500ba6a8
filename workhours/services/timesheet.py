"""Timesheet engine: users, jobs, daily entries and the salary report."""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable

from sqlalchemy.exc import IntegrityError

from workhours.core.logger import get_logger, timeit
from workhours.core.security import Principal, hash_password, verify_password
from workhours.db import RecordStore
from workhours.domain import (
    DailyEntryRecord,
    Home,
    JobRecord,
    Report,
    SalariedEntry,
    duration,
    parse_date,
    parse_time,
)
from workhours.exceptions import (
    DuplicateEmailError,
    DuplicateEntryError,
    DuplicateJobError,
    InvalidCredentialsError,
    InvalidDateError,
    NotFoundError,
    ValidationError,
)
from workhours.repositories import DailyEntryRepository, JobRepository, UserRepository

LOGGER = get_logger(__name__)

CENTS = Decimal("0.01")
MAX_SALARY_AMOUNT = Decimal("1e10")


def _required(*values: Any) -> list[str]:
    """Return the stripped text of every value, or raise if any is blank."""

    cleaned = [str(value).strip() if value is not None else "" for value in values]
    if not all(cleaned):
        raise ValidationError()
    return cleaned


def _parse_amount(value: Any) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            raise ValidationError("Salary amount must be a number")
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("Salary amount must be a number") from exc
    if amount < 0:
        raise ValidationError("Salary amount must not be negative")
    # Numeric(12, 2) column
    if amount >= MAX_SALARY_AMOUNT:
        raise ValidationError("Salary amount is too large")
    return amount


class TimesheetEngine:
    """Validate, store and aggregate a user's jobs and daily entries.

    Every operation opens its own transaction on the injected store and
    re-reads what it needs; nothing is cached between calls. All job and
    entry operations are scoped to ``principal.user_id``.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        restrict_to_today: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._restrict_to_today = restrict_to_today
        self._clock = clock or datetime.now

    def _now(self) -> datetime:
        return self._clock()

    # Users -----------------------------------------------------------------

    def register_user(self, username: str, email: str, password: str) -> int:
        """Create an account and return its identifier."""

        if not password:
            raise ValidationError()
        username, email = _required(username, email)

        with self._store.session_scope() as session:
            users = UserRepository(session)
            if users.find_by_email(email) is not None:
                raise DuplicateEmailError()
            try:
                user = users.insert_one(
                    username=username,
                    email=email,
                    password_hash=hash_password(password),
                    created_at=self._now(),
                )
            except IntegrityError as exc:
                raise DuplicateEmailError() from exc
            user_id = user.id

        LOGGER.info("User registered", extra={"user_id": user_id, "username": username})
        return user_id

    def authenticate(self, email: str, password: str) -> Principal:
        """Verify credentials; unknown email and wrong password fail alike."""

        if not email or not password:
            raise InvalidCredentialsError()

        with self._store.session_scope() as session:
            user = UserRepository(session).find_by_email(email.strip())
            if user is None or not verify_password(password, user.password_hash):
                raise InvalidCredentialsError()
            return Principal(username=user.username, user_id=user.id)

    # Jobs ------------------------------------------------------------------

    def add_job(
        self,
        principal: Principal,
        job_name: str,
        job_date: Any,
        salary_type: str,
        salary_amount: Any,
    ) -> int:
        """Persist a new job for ``principal`` and return its identifier."""

        job_name, raw_date, salary_type, raw_amount = _required(
            job_name, job_date, salary_type, salary_amount
        )
        values = {
            "job_name": job_name,
            "job_date": parse_date(raw_date, field="job date"),
            "salary_type": salary_type,
            "salary_amount": _parse_amount(raw_amount),
        }

        with self._store.session_scope() as session:
            jobs = JobRepository(session)
            if jobs.find_by_name(principal.user_id, job_name) is not None:
                raise DuplicateJobError()
            try:
                job = jobs.insert_one(owner_id=principal.user_id, created_at=self._now(), **values)
            except IntegrityError as exc:
                raise DuplicateJobError() from exc
            job_id = job.id

        LOGGER.info("Job added", extra={"job_id": job_id, "job_name": job_name})
        return job_id

    def update_job(
        self,
        principal: Principal,
        job_id: int,
        job_name: str,
        job_date: Any,
        salary_type: str,
        salary_amount: Any,
    ) -> JobRecord:
        """Overwrite the mutable fields of an owned job."""

        job_name, raw_date, salary_type, raw_amount = _required(
            job_name, job_date, salary_type, salary_amount
        )
        values = {
            "job_name": job_name,
            "job_date": parse_date(raw_date, field="job date"),
            "salary_type": salary_type,
            "salary_amount": _parse_amount(raw_amount),
        }

        with self._store.session_scope() as session:
            jobs = JobRepository(session)
            if jobs.find_one(id=job_id, owner_id=principal.user_id) is None:
                raise NotFoundError("Job not found")
            clash = jobs.find_by_name(principal.user_id, job_name)
            if clash is not None and clash.id != job_id:
                raise DuplicateJobError()
            try:
                job = jobs.update_one(job_id, principal.user_id, **values)
            except IntegrityError as exc:
                raise DuplicateJobError() from exc
            if job is None:
                raise NotFoundError("Job not found")
            record = JobRecord.from_row(job)

        LOGGER.info("Job updated", extra={"job_id": job_id})
        return record

    def delete_job(self, principal: Principal, job_id: int) -> None:
        with self._store.session_scope() as session:
            if not JobRepository(session).delete_one(job_id, principal.user_id):
                raise NotFoundError("Job not found")
        LOGGER.info("Job deleted", extra={"job_id": job_id})

    def list_jobs(self, principal: Principal) -> list[JobRecord]:
        with self._store.session_scope() as session:
            rows = JobRepository(session).find_many(owner_id=principal.user_id)
            return [JobRecord.from_row(row) for row in rows]

    # Daily entries ---------------------------------------------------------

    def _entry_values(
        self, job_name: Any, entry_date: Any, start_time: Any, end_time: Any
    ) -> dict[str, Any]:
        job_name, raw_date, raw_start, raw_end = _required(
            job_name, entry_date, start_time, end_time
        )
        day = parse_date(raw_date)
        if self._restrict_to_today and day != self._now().date():
            raise InvalidDateError()
        start = parse_time(raw_start, field="start time")
        end = parse_time(raw_end, field="end time")
        return {
            "job_name": job_name,
            "entry_date": day,
            "start_time": start,
            "end_time": end,
            "total_hours": duration(day, start, end),
        }

    def add_daily_entry(
        self,
        principal: Principal,
        job_name: str,
        entry_date: Any,
        start_time: Any,
        end_time: Any,
    ) -> int:
        """Log one shift; at most one entry per job and date."""

        values = self._entry_values(job_name, entry_date, start_time, end_time)

        with self._store.session_scope() as session:
            entries = DailyEntryRepository(session)
            existing = entries.find_one(
                owner_id=principal.user_id,
                job_name=values["job_name"],
                entry_date=values["entry_date"],
            )
            if existing is not None:
                raise DuplicateEntryError()
            try:
                entry = entries.insert_one(
                    owner_id=principal.user_id, created_at=self._now(), **values
                )
            except IntegrityError as exc:
                raise DuplicateEntryError() from exc
            entry_id = entry.id

        LOGGER.info(
            "Daily entry added",
            extra={"entry_id": entry_id, "total_hours": str(values["total_hours"])},
        )
        return entry_id

    def update_daily_entry(
        self,
        principal: Principal,
        entry_id: int,
        job_name: str,
        entry_date: Any,
        start_time: Any,
        end_time: Any,
    ) -> DailyEntryRecord:
        """Rewrite an owned entry and recompute its hours."""

        values = self._entry_values(job_name, entry_date, start_time, end_time)

        with self._store.session_scope() as session:
            entries = DailyEntryRepository(session)
            if entries.find_one(id=entry_id, owner_id=principal.user_id) is None:
                raise NotFoundError("Entry not found")
            clash = entries.find_one(
                owner_id=principal.user_id,
                job_name=values["job_name"],
                entry_date=values["entry_date"],
            )
            if clash is not None and clash.id != entry_id:
                raise DuplicateEntryError()
            try:
                entry = entries.update_one(entry_id, principal.user_id, **values)
            except IntegrityError as exc:
                raise DuplicateEntryError() from exc
            if entry is None:
                raise NotFoundError("Entry not found")
            record = DailyEntryRecord.from_row(entry)

        LOGGER.info("Daily entry updated", extra={"entry_id": entry_id})
        return record

    def delete_daily_entry(self, principal: Principal, entry_id: int) -> None:
        with self._store.session_scope() as session:
            if not DailyEntryRepository(session).delete_one(entry_id, principal.user_id):
                raise NotFoundError("Entry not found")
        LOGGER.info("Daily entry deleted", extra={"entry_id": entry_id})

    def list_daily_entries(self, principal: Principal) -> list[DailyEntryRecord]:
        with self._store.session_scope() as session:
            rows = DailyEntryRepository(session).find_many(owner_id=principal.user_id)
            return [DailyEntryRecord.from_row(row) for row in rows]

    # Reporting -------------------------------------------------------------

    def home(self, principal: Principal) -> Home:
        return Home(
            username=principal.username,
            jobs=self.list_jobs(principal),
            entries=self.list_daily_entries(principal),
        )

    def compute_report(self, principal: Principal) -> Report:
        """Aggregate entries into salaries, monthly hours and this month's days.

        "Current month" is taken from the clock on every call.
        """

        jobs = self.list_jobs(principal)
        entries = self.list_daily_entries(principal)
        now = self._now()

        with timeit("Timesheet report", logger=LOGGER, level=logging.DEBUG, unit="entries") as timer:
            rates = {job.job_name: job.salary_amount for job in jobs}
            monthly: dict[str, dict[str, Decimal]] = defaultdict(lambda: defaultdict(Decimal))
            day_counts: dict[str, int] = defaultdict(int)
            salary_by_job: dict[str, Decimal] = defaultdict(Decimal)
            salaried: list[SalariedEntry] = []

            for entry in entries:
                rate = rates.get(entry.job_name, Decimal("0"))
                salary = (entry.total_hours * rate).quantize(CENTS, rounding=ROUND_HALF_UP)
                salaried.append(SalariedEntry(entry=entry, calculated_salary=salary))
                salary_by_job[entry.job_name] += salary
                monthly[entry.job_name][entry.month_key] += entry.total_hours
                if (entry.entry_date.year, entry.entry_date.month) == (now.year, now.month):
                    day_counts[entry.job_name] += 1
                timer.add()

        return Report(
            generated_at=now,
            jobs=jobs,
            entries=salaried,
            monthly_hours_by_job={job: dict(months) for job, months in monthly.items()},
            current_month_day_count_by_job=dict(day_counts),
            salary_by_job=dict(salary_by_job),
            total_salary=sum((item.calculated_salary for item in salaried), Decimal("0.00")),
            total_hours=sum((entry.total_hours for entry in entries), Decimal("0.00")),
        )


__all__ = ["TimesheetEngine"]
