"""HTTP endpoints for generating and listing task assignments."""

import logging
from datetime import UTC, date, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from src.core.config import constants
from src.core.errors import classify_generation_error
from src.domain.assignment import Assignment, AssignmentStatus
from src.services import assignment_service
from src.services.assignment_generator import generate_assignments


router = APIRouter(tags=["assignments"])
logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(UTC).date()


class GenerateAssignmentsRequest(BaseModel):
    """Body of the admin generation trigger."""

    household_id: str
    start_date: date
    days: int = Field(ge=1, le=constants.API_MAX_GENERATION_DAYS)


class GenerateForDayRequest(BaseModel):
    """Body of the single-day generation trigger."""

    target_date: date | None = Field(default=None, alias="date")
    task_id: str | None = None


@router.post("/admin/tasks/generate-assignments")
async def post_generate_assignments(request: GenerateAssignmentsRequest) -> dict[str, Any]:
    """Generate assignments for a household over a date window.

    Generation errors are reported inside the response body; the request itself
    only fails when the body is malformed.
    """
    result = await generate_assignments(request.household_id, request.start_date, request.days)

    if result.errors:
        logger.warning(
            "Generation finished with errors",
            extra={"household_id": request.household_id, "errors": result.errors},
        )

    return {
        "success": True,
        "result": result.model_dump(),
        "error_details": [classify_generation_error(error).model_dump(mode="json") for error in result.errors],
    }


@router.post("/households/{household_id}/assignments/generate")
async def post_generate_for_day(household_id: str, request: GenerateForDayRequest | None = None) -> dict[str, Any]:
    """Generate one day of assignments and return that day's assignments, newest first."""
    request = request or GenerateForDayRequest()
    target_date = request.target_date or _today()

    result = await generate_assignments(household_id, target_date, 1)
    assignments = await assignment_service.list_household_assignments(
        household_id=household_id,
        start_date=target_date,
        task_id=request.task_id,
        newest_first=True,
    )

    return {
        "generated": result.created,
        "errors": result.errors,
        "assignments": [assignment.model_dump(mode="json") for assignment in assignments],
    }


@router.get("/households/{household_id}/assignments")
async def get_assignments(
    household_id: str,
    start: Annotated[date | None, Query(alias="date")] = None,
    days: Annotated[int, Query(ge=1, le=constants.API_MAX_GENERATION_DAYS)] = 1,
    status: AssignmentStatus | None = None,
    child_id: str | None = None,
) -> list[Assignment]:
    """List a household's assignments over a date window, ordered by date."""
    return await assignment_service.list_household_assignments(
        household_id=household_id,
        start_date=start or _today(),
        days=days,
        status=status,
        child_id=child_id,
    )
