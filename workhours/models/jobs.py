"""ORM model for per-user job (pay-rate) definitions."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import ID_TYPE, Base


class Job(Base):
    """A named pay rate owned by one user."""

    __tablename__ = "job"
    __table_args__ = (UniqueConstraint("owner_id", "job_name", name="uq_job_owner_name"),)

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("user.id"), nullable=False, index=True)
    job_name: Mapped[str] = mapped_column(String(160), nullable=False)
    job_date: Mapped[date] = mapped_column(Date, nullable=False)
    salary_type: Mapped[str] = mapped_column(String(32), nullable=False)
    salary_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
