"""ORM model for logged shifts."""
from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import ID_TYPE, Base


class DailyEntry(Base):
    """One shift against a job.

    ``job_name`` is a denormalized copy of the job's name, not a foreign key.
    """

    __tablename__ = "daily_entry"
    __table_args__ = (
        UniqueConstraint("owner_id", "job_name", "entry_date", name="uq_entry_owner_job_date"),
    )

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("user.id"), nullable=False, index=True)
    job_name: Mapped[str] = mapped_column(String(160), nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    total_hours: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
