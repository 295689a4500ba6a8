"""Routes for logging, editing and removing daily entries."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse, Response

from workhours.core.security import Principal, get_principal
from workhours.dependencies import get_engine
from workhours.exceptions import TimesheetError
from workhours.routers.views import form_error
from workhours.schemas import DailyEntryOut
from workhours.services import TimesheetEngine

router = APIRouter(tags=["daily entries"])


@router.get("/daily-entries", response_model=list[DailyEntryOut])
def list_daily_entries(
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> list[DailyEntryOut]:
    return [DailyEntryOut.model_validate(entry) for entry in engine.list_daily_entries(principal)]


@router.post("/add-daily-job")
def add_daily_entry(
    job_name: str = Form("", alias="jobName"),
    entry_date: str = Form("", alias="date"),
    start_time: str = Form("", alias="startTime"),
    end_time: str = Form("", alias="endTime"),
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> Response:
    try:
        engine.add_daily_entry(principal, job_name, entry_date, start_time, end_time)
    except TimesheetError as exc:
        return form_error(engine, principal, exc)
    return RedirectResponse("/", status_code=303)


@router.post("/daily-entries/{entry_id}/edit", response_model=DailyEntryOut)
def edit_daily_entry(
    entry_id: int,
    job_name: str = Form("", alias="jobName"),
    entry_date: str = Form("", alias="date"),
    start_time: str = Form("", alias="startTime"),
    end_time: str = Form("", alias="endTime"),
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
):
    try:
        entry = engine.update_daily_entry(
            principal, entry_id, job_name, entry_date, start_time, end_time
        )
    except TimesheetError as exc:
        return form_error(engine, principal, exc)
    return DailyEntryOut.model_validate(entry)


@router.post("/daily-entries/{entry_id}/delete")
def delete_daily_entry(
    entry_id: int,
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> Response:
    try:
        engine.delete_daily_entry(principal, entry_id)
    except TimesheetError as exc:
        return form_error(engine, principal, exc)
    return RedirectResponse("/", status_code=303)


__all__ = ["router"]
