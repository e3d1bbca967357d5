"""Pydantic models for service layer return types.

These models provide type safety at service boundaries, converting database
dictionaries into typed objects with validation.
"""

from pydantic import BaseModel, Field


class GenerationResult(BaseModel):
    """Outcome of one assignment generation run."""

    created: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)


class HouseholdGenerationSummary(BaseModel):
    """Per-household outcome of the scheduled generation job."""

    household_id: str
    created: int
    skipped: int
    error_count: int
