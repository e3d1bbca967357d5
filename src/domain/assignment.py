"""Assignment domain models: dated, optionally per-child occurrences of a task."""

from datetime import date
from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class AssignmentStatus(StrEnum):
    """Assignment lifecycle state."""

    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class AssignmentKey(NamedTuple):
    """Identity of an assignment for duplicate detection.

    ``child_id`` of None stands for a household-wide assignment and never
    equals a real child id, so (task, date, None) and (task, date, "7") are
    distinct keys.
    """

    task_id: str
    date: date
    child_id: str | None


class PendingAssignment(BaseModel):
    """Assignment produced by a rule expansion, not yet persisted."""

    model_config = ConfigDict(frozen=True)

    household_id: str
    task_id: str
    child_id: str | None
    date: date

    @property
    def key(self) -> AssignmentKey:
        """Identity key of this assignment."""
        return AssignmentKey(task_id=self.task_id, date=self.date, child_id=self.child_id)


class Assignment(BaseModel):
    """Assignment data transfer object as stored in the task_assignments table."""

    id: str = Field(..., description="Unique assignment ID from database")
    created: str = Field(..., description="Creation timestamp")
    household_id: str = Field(..., description="Owning household ID")
    task_id: str = Field(..., description="Task this assignment is an occurrence of")
    child_id: str | None = Field(default=None, description="Assigned child, None for household-wide")
    date: date  # Calendar date the assignment is due
    status: AssignmentStatus = Field(default=AssignmentStatus.PENDING, description="Current lifecycle state")
