"""Helpers shared by the form-handling routes."""
from __future__ import annotations

from fastapi.responses import JSONResponse

from workhours.core.logger import get_logger
from workhours.core.security import Principal
from workhours.exceptions import TimesheetError
from workhours.schemas import ErrorOut, JobOut
from workhours.services import TimesheetEngine

LOGGER = get_logger(__name__)


def auth_form_error(form: str, exc: TimesheetError) -> JSONResponse:
    payload = ErrorOut(error=exc.message, form=form)
    return JSONResponse(payload.model_dump(exclude_none=True), status_code=exc.status_code)


def form_error(
    engine: TimesheetEngine, principal: Principal, exc: TimesheetError
) -> JSONResponse:
    """Answer a rejected job/entry form with the message and the user's jobs."""

    LOGGER.info("Form rejected: %s", exc.message, extra={"error": type(exc).__name__})
    jobs = [JobOut.model_validate(job) for job in engine.list_jobs(principal)]
    payload = ErrorOut(error=exc.message, jobs=jobs)
    return JSONResponse(payload.model_dump(mode="json", exclude_none=True), status_code=exc.status_code)
