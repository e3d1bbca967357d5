"""Per-rule expansion of one task over a list of dates into pending assignments."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import date

from src.core.errors import RuleConfigError
from src.domain.assignment import PendingAssignment
from src.domain.task import DailyRule, RepeatingRule, RotationType, Task, WeeklyRotationRule
from src.services import rotation_service


logger = logging.getLogger(__name__)

# Resolves (task id, window start) to the child of the task's latest earlier assignment, or None
LastChildLookup = Callable[[str, date], Awaitable[str | None]]


def _pending(task: Task, day: date, child_id: str | None) -> PendingAssignment:
    return PendingAssignment(household_id=task.household_id, task_id=task.id, child_id=child_id, date=day)


def expand_daily(task: Task, rule: DailyRule, dates: Sequence[date]) -> list[PendingAssignment]:
    """One assignment per date, rotating children day by day."""
    return [
        _pending(task, day, rotation_service.child_at_position(rule.assigned_children, index))
        for index, day in enumerate(dates)
    ]


def expand_repeating(task: Task, rule: RepeatingRule, dates: Sequence[date]) -> list[PendingAssignment]:
    """One assignment per date falling on a repeat day, rotating children per occurrence."""
    repeat_days = set(rule.repeat_days)
    assignments = []
    occurrence_count = 0

    for day in dates:
        if rotation_service.weekday_number(day) not in repeat_days:
            continue
        child_id = rotation_service.child_at_position(rule.assigned_children, occurrence_count)
        assignments.append(_pending(task, day, child_id))
        occurrence_count += 1

    return assignments


async def expand_weekly_rotation(
    task: Task,
    rule: WeeklyRotationRule,
    dates: Sequence[date],
    *,
    last_child_lookup: LastChildLookup,
) -> list[PendingAssignment]:
    """Every date in the window goes to one child chosen once per call."""
    if not dates:
        return []

    if rule.rotation_type == RotationType.ODD_EVEN_WEEK:
        child_id = rotation_service.odd_even_week_child(rule.assigned_children, dates[0])
    elif rule.rotation_type == RotationType.ALTERNATING:
        last_child_id = await last_child_lookup(task.id, dates[0])
        child_id = rotation_service.alternating_child(rule.assigned_children, last_child_id)
        logger.debug(
            "Resolved alternating rotation",
            extra={"task_id": task.id, "last_child_id": last_child_id, "child_id": child_id},
        )
    else:
        raise RuleConfigError(f"Unknown rotation_type: {rule.rotation_type}")

    return [_pending(task, day, child_id) for day in dates]


async def expand_task(
    task: Task,
    dates: Sequence[date],
    *,
    last_child_lookup: LastChildLookup,
) -> list[PendingAssignment]:
    """Produce every candidate assignment of ``task`` across ``dates``.

    Args:
        task: Active task to expand
        dates: Ordered, consecutive generation window
        last_child_lookup: History reader used by alternating rotations only

    Returns:
        Candidate assignments in date order

    Raises:
        RuleConfigError: If the task's rule configuration is incomplete or unknown
    """
    rule = task.parse_rule()

    if isinstance(rule, DailyRule):
        return expand_daily(task, rule, dates)
    if isinstance(rule, RepeatingRule):
        return expand_repeating(task, rule, dates)
    return await expand_weekly_rotation(task, rule, dates, last_child_lookup=last_child_lookup)
