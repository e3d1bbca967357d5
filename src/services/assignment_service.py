"""Assignment queries for the HTTP layer and the nightly job."""

import logging
from datetime import date, timedelta

from src.core import db_client
from src.core.config import constants
from src.core.db_client import sanitize_param
from src.domain.assignment import Assignment, AssignmentStatus
from src.services import assignment_repository


logger = logging.getLogger(__name__)


async def list_household_assignments(
    *,
    household_id: str,
    start_date: date,
    days: int = 1,
    status: AssignmentStatus | None = None,
    child_id: str | None = None,
    task_id: str | None = None,
    newest_first: bool = False,
) -> list[Assignment]:
    """List a household's assignments dated within ``days`` days from ``start_date``.

    Args:
        household_id: Household to list assignments for
        start_date: First date of the window
        days: Window length in days
        status: Only assignments in this state
        child_id: Only assignments of this child
        task_id: Only assignments of this task
        newest_first: Order by creation, newest first, instead of by date

    Returns:
        List of Assignment objects
    """
    end_date = start_date + timedelta(days=days - 1)

    filters = [
        f'household_id = "{sanitize_param(household_id)}"',
        f'date >= "{start_date.isoformat()}"',
        f'date <= "{end_date.isoformat()}"',
    ]
    if status:
        filters.append(f'status = "{sanitize_param(status.value)}"')
    if child_id:
        filters.append(f'child_id = "{sanitize_param(child_id)}"')
    if task_id:
        filters.append(f'task_id = "{sanitize_param(task_id)}"')

    records = await db_client.list_records(
        collection="task_assignments",
        filter_query=" && ".join(filters),
        sort="created DESC, id DESC" if newest_first else "date ASC, task_id ASC, id ASC",
        per_page=constants.MAX_LIST_LIMIT,
    )

    logger.debug("Listed household assignments", extra={"household_id": household_id, "count": len(records)})
    return [Assignment.model_validate(record) for record in records]


async def list_household_ids() -> list[str]:
    """Return the ids of households owning at least one active, non-single task, ascending."""
    conn = await db_client.get_connection()
    return await assignment_repository.list_generating_household_ids(conn)
