"""Assignment generation: expand a household's active tasks into dated assignments.

A run loads the household's active tasks, expands each one over the requested
window, drops candidates that already exist and inserts the rest, all inside a
single transaction. Running the same request twice is safe: the second run
only reports skips.

Results are always returned, never raised:
- invalid input yields one error and touches nothing
- a task with a broken rule configuration yields one error for that task while
  every other task still generates
- a storage failure rolls the whole run back and yields one
  "Transaction failed: ..." error
"""

import logging
from datetime import date, timedelta
from functools import partial

from src.core import db_client
from src.core.config import settings
from src.core.errors import TRANSACTION_FAILED_PREFIX, RuleConfigError
from src.core.logging import span
from src.domain.assignment import PendingAssignment
from src.models.service_models import GenerationResult
from src.services import assignment_repository
from src.services.idempotency import partition_new_assignments
from src.services.rule_expander import expand_task


logger = logging.getLogger(__name__)


def build_date_list(start_date: date, days: int) -> list[date]:
    """Return ``days`` consecutive calendar dates beginning at ``start_date``.

    Plain calendar dates carry no time zone, so the list is identical wherever
    the service runs.
    """
    return [start_date + timedelta(days=offset) for offset in range(days)]


def validate_request(household_id: str | None, days: int) -> str | None:
    """Return the validation error for a generation request, or None if it is valid."""
    if not household_id or not str(household_id).strip():
        return "household_id is required"

    if not settings.generation_min_days <= days <= settings.generation_max_days:
        return f"days must be between {settings.generation_min_days} and {settings.generation_max_days}"

    return None


async def generate_assignments(household_id: str, start_date: date, days: int) -> GenerationResult:
    """Generate task assignments for a household over a date window.

    Args:
        household_id: Household whose active tasks are expanded
        start_date: First calendar date of the window
        days: Number of consecutive days in the window

    Returns:
        GenerationResult with created/skipped counts and any errors
    """
    result = GenerationResult()

    validation_error = validate_request(household_id, days)
    if validation_error:
        logger.warning(
            "assignment_generation_rejected",
            extra={"household_id": household_id, "days": days, "error": validation_error},
        )
        result.errors.append(validation_error)
        return result

    household_id = str(household_id).strip()

    with span("assignment_generator.generate", household_id=household_id, start_date=str(start_date), days=days):
        try:
            async with db_client.transaction() as conn:
                tasks = await assignment_repository.list_active_tasks(conn, household_id=household_id)

                if not tasks:
                    logger.info("No active tasks to generate", extra={"household_id": household_id})
                    return result

                dates = build_date_list(start_date, days)
                existing_keys = await assignment_repository.get_existing_keys(
                    conn,
                    household_id=household_id,
                    start_date=dates[0],
                    end_date=dates[-1],
                )

                last_child_lookup = partial(assignment_repository.get_last_assigned_child, conn)
                candidates: list[PendingAssignment] = []

                for task in tasks:
                    try:
                        candidates.extend(await expand_task(task, dates, last_child_lookup=last_child_lookup))
                    except RuleConfigError as e:
                        logger.warning(
                            "Skipping task with invalid rule configuration",
                            extra={"household_id": household_id, "task_id": task.id, "error": str(e)},
                        )
                        result.errors.append(f"Task {task.name} ({task.id}): {e}")

                new_assignments, existing_assignments = partition_new_assignments(candidates, existing_keys)
                result.skipped = len(existing_assignments)
                result.created = await assignment_repository.insert_assignments(conn, new_assignments)
        except Exception as e:
            logger.exception(
                "assignment_generation_failed",
                extra={"household_id": household_id, "start_date": str(start_date), "days": days},
            )
            return GenerationResult(errors=[f"{TRANSACTION_FAILED_PREFIX}{e}"])

    logger.info(
        "assignment_generation_complete",
        extra={
            "household_id": household_id,
            "start_date": str(start_date),
            "days": days,
            "created": result.created,
            "skipped": result.skipped,
            "error_count": len(result.errors),
        },
    )
    return result
