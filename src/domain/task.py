"""Task domain models: recurring chore definitions and their rule configurations."""

import json
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, ValidationError, field_validator

from src.core.errors import RuleConfigError


class RuleType(StrEnum):
    """Recurrence algorithm governing how a task expands into assignments."""

    DAILY = "daily"
    REPEATING = "repeating"
    WEEKLY_ROTATION = "weekly_rotation"
    SINGLE = "single"  # Claimed by children on their own, never generated


class RotationType(StrEnum):
    """How a weekly rotation picks the child for a generation window."""

    ODD_EVEN_WEEK = "odd_even_week"
    ALTERNATING = "alternating"


Weekday = Annotated[int, Field(ge=0, le=6)]  # 0=Sunday .. 6=Saturday

# Child ids are stored as integers but handled as strings, like every other record id
ChildId = Annotated[str, BeforeValidator(lambda value: str(value) if isinstance(value, int) else value)]


class DailyRule(BaseModel):
    """Every day; rotate through children day by day when any are given."""

    rule_type: Literal["daily"] = "daily"
    assigned_children: list[ChildId] = Field(default_factory=list)


class RepeatingRule(BaseModel):
    """Only on the listed weekdays; rotate per occurrence when children are given."""

    rule_type: Literal["repeating"] = "repeating"
    repeat_days: list[Weekday] = Field(min_length=1)
    assigned_children: list[ChildId] = Field(default_factory=list)


class WeeklyRotationRule(BaseModel):
    """One child owns the whole generation window."""

    rule_type: Literal["weekly_rotation"] = "weekly_rotation"
    rotation_type: RotationType
    assigned_children: list[ChildId] = Field(min_length=1)


RuleConfig = Annotated[DailyRule | RepeatingRule | WeeklyRotationRule, Field(discriminator="rule_type")]

_rule_adapter: TypeAdapter[DailyRule | RepeatingRule | WeeklyRotationRule] = TypeAdapter(RuleConfig)


class Task(BaseModel):
    """Task data transfer object as stored in the tasks table."""

    id: str = Field(..., description="Unique task ID from database")
    household_id: str = Field(..., description="Owning household ID")
    name: str = Field(..., description="Display name")
    description: str | None = Field(default=None, description="Detailed task description")
    points: int = Field(default=10, description="Points earned per completed assignment")
    rule_type: str = Field(..., description="daily, repeating, weekly_rotation or single")
    rule_config: dict[str, Any] | str = Field(
        default_factory=dict,
        description="Rule-specific configuration; kept as the raw text when it is not a JSON object",
    )
    active: bool = Field(default=True, description="Inactive tasks are never generated")

    @field_validator("rule_config", mode="before")
    @classmethod
    def _decode_rule_config(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            try:
                decoded = json.loads(value)
            except json.JSONDecodeError:
                return value
            return decoded if isinstance(decoded, dict) else value
        return value

    def parse_rule(self) -> DailyRule | RepeatingRule | WeeklyRotationRule:
        """Validate ``rule_config`` against the shape required by ``rule_type``.

        Raises:
            RuleConfigError: If a required field is missing or malformed
        """
        return parse_rule_config(rule_type=self.rule_type, rule_config=self.rule_config)


def _describe_validation_error(rule_type: str, error: ValidationError) -> str:
    """Turn the first pydantic error into a short, task-editor friendly message."""
    first = error.errors()[0]
    error_type = first["type"]

    if error_type in {"union_tag_invalid", "union_tag_not_found"}:
        return f"Unknown rule_type: {rule_type}"

    # Discriminated union locations start with the tag, e.g. ("repeating", "repeat_days", 0)
    loc = first["loc"]
    field = str(loc[1]) if len(loc) > 1 else str(loc[0]) if loc else "rule_config"

    if error_type in {"missing", "too_short"}:
        return f"{field} is required for {rule_type} tasks"
    if field == "rotation_type" and error_type == "enum":
        return f"Unknown rotation_type: {first['input']}"
    return f"Invalid {field} for {rule_type} tasks: {first['msg']}"


def parse_rule_config(
    *,
    rule_type: str,
    rule_config: dict[str, Any] | str | None,
) -> DailyRule | RepeatingRule | WeeklyRotationRule:
    """Build the typed rule for a task from its raw configuration.

    Args:
        rule_type: Task rule type
        rule_config: Raw JSON configuration stored with the task

    Returns:
        One of DailyRule, RepeatingRule, WeeklyRotationRule

    Raises:
        RuleConfigError: For single tasks, unknown rule types and invalid configurations
    """
    if rule_type == RuleType.SINGLE:
        raise RuleConfigError("single tasks are claimed, not generated")
    if isinstance(rule_config, str):
        raise RuleConfigError("rule_config is not a JSON object")

    # Explicit nulls mean "not set", same as an absent key
    fields = {key: value for key, value in (rule_config or {}).items() if value is not None}
    try:
        return _rule_adapter.validate_python({**fields, "rule_type": rule_type})
    except ValidationError as e:
        raise RuleConfigError(_describe_validation_error(rule_type, e)) from e
