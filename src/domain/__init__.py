"""Domain models and DTOs."""

from src.domain.assignment import Assignment, AssignmentKey, AssignmentStatus, PendingAssignment
from src.domain.task import (
    DailyRule,
    RepeatingRule,
    RotationType,
    RuleType,
    Task,
    WeeklyRotationRule,
    parse_rule_config,
)


__all__ = [
    "Assignment",
    "AssignmentKey",
    "AssignmentStatus",
    "DailyRule",
    "PendingAssignment",
    "RepeatingRule",
    "RotationType",
    "RuleType",
    "Task",
    "WeeklyRotationRule",
    "parse_rule_config",
]
