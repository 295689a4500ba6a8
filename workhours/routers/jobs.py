"""Routes managing a user's job definitions."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse, Response

from workhours.core.security import Principal, get_principal
from workhours.dependencies import get_engine
from workhours.exceptions import TimesheetError
from workhours.routers.views import form_error
from workhours.schemas import JobOut
from workhours.services import TimesheetEngine

router = APIRouter(tags=["jobs"])


@router.get("/jobs", response_model=list[JobOut])
def list_jobs(
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> list[JobOut]:
    return [JobOut.model_validate(job) for job in engine.list_jobs(principal)]


@router.post("/add-job")
def add_job(
    job_name: str = Form("", alias="jobName"),
    job_date: str = Form("", alias="date"),
    salary_type: str = Form("", alias="salaryType"),
    salary_amount: str = Form("", alias="salaryAmount"),
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> Response:
    try:
        engine.add_job(principal, job_name, job_date, salary_type, salary_amount)
    except TimesheetError as exc:
        return form_error(engine, principal, exc)
    return RedirectResponse("/", status_code=303)


@router.post("/jobs/{job_id}/edit", response_model=JobOut)
def edit_job(
    job_id: int,
    job_name: str = Form("", alias="jobName"),
    job_date: str = Form("", alias="date"),
    salary_type: str = Form("", alias="salaryType"),
    salary_amount: str = Form("", alias="salaryAmount"),
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
):
    try:
        job = engine.update_job(principal, job_id, job_name, job_date, salary_type, salary_amount)
    except TimesheetError as exc:
        return form_error(engine, principal, exc)
    return JobOut.model_validate(job)


@router.post("/jobs/{job_id}/delete")
def delete_job(
    job_id: int,
    principal: Principal = Depends(get_principal),
    engine: TimesheetEngine = Depends(get_engine),
) -> Response:
    try:
        engine.delete_job(principal, job_id)
    except TimesheetError as exc:
        return form_error(engine, principal, exc)
    return RedirectResponse("/", status_code=303)


__all__ = ["router"]
