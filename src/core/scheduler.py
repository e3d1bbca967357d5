"""Scheduler for automated jobs (upcoming assignment generation)."""

import logging
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from src.core.config import constants, settings
from src.core.logging import log_with_context
from src.core.scheduler_tracker import retry_job_with_backoff
from src.models.service_models import HouseholdGenerationSummary
from src.services.assignment_generator import generate_assignments
from src.services.assignment_service import list_household_ids


logger = logging.getLogger(__name__)

ASSIGNMENT_GENERATION_JOB = "assignment_generation"

# Global scheduler instance
scheduler = AsyncIOScheduler()


async def generate_upcoming_assignments() -> list[HouseholdGenerationSummary]:
    """Generate assignments for every household from today over the configured horizon.

    Runs daily shortly after midnight. Per-household errors are logged and do
    not stop other households from generating.

    Returns:
        One summary per household
    """
    today = datetime.now(UTC).date()
    household_ids = await list_household_ids()
    summaries: list[HouseholdGenerationSummary] = []

    for household_id in household_ids:
        result = await generate_assignments(household_id, today, settings.generation_horizon_days)

        if result.errors:
            log_with_context(
                logger,
                "warning",
                "Assignment generation reported errors",
                household_id=household_id,
                errors=result.errors,
            )

        summaries.append(
            HouseholdGenerationSummary(
                household_id=household_id,
                created=result.created,
                skipped=result.skipped,
                error_count=len(result.errors),
            )
        )

    logger.info(
        "Upcoming assignments generated",
        extra={
            "households": len(summaries),
            "created": sum(s.created for s in summaries),
            "skipped": sum(s.skipped for s in summaries),
        },
    )
    return summaries


async def _run_generation_job() -> None:
    await generate_upcoming_assignments()


async def _scheduled_generation() -> None:
    """Cron entry point. Must stay a coroutine function so AsyncIOExecutor awaits it on the loop."""
    await retry_job_with_backoff(_run_generation_job, ASSIGNMENT_GENERATION_JOB)


def start_scheduler() -> None:
    """Start the scheduler and register all jobs.

    This should be called during FastAPI app startup.
    """
    logger.info("Starting scheduler")

    scheduler.add_job(
        _scheduled_generation,
        trigger=CronTrigger(hour=constants.GENERATION_JOB_HOUR, minute=constants.GENERATION_JOB_MINUTE),
        id=ASSIGNMENT_GENERATION_JOB,
        name="Generate Upcoming Task Assignments",
        replace_existing=True,
    )
    logger.info(
        f"Scheduled assignment generation job: daily at "
        f"{constants.GENERATION_JOB_HOUR}:{constants.GENERATION_JOB_MINUTE:02d}"
    )

    scheduler.start()
    logger.info("Scheduler started successfully")


def stop_scheduler() -> None:
    """Stop the scheduler.

    This should be called during FastAPI app shutdown.
    """
    logger.info("Stopping scheduler")
    scheduler.shutdown(wait=True)
    logger.info("Scheduler stopped")
