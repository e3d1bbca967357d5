"""Error types and classification for assignment generation."""

from enum import Enum

from pydantic import BaseModel


TRANSACTION_FAILED_PREFIX = "Transaction failed: "


class RuleConfigError(ValueError):
    """A task's rule configuration cannot be expanded into assignments.

    Raised per task; the generation run records it and moves on to the
    remaining tasks.
    """


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Request errors
    ERR_HOUSEHOLD_REQUIRED = "ERR_HOUSEHOLD_REQUIRED"
    ERR_DAYS_OUT_OF_RANGE = "ERR_DAYS_OUT_OF_RANGE"

    # Task errors
    ERR_INVALID_RULE_CONFIG = "ERR_INVALID_RULE_CONFIG"

    # Storage errors
    ERR_TRANSACTION_FAILED = "ERR_TRANSACTION_FAILED"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity
    detail: str


def classify_generation_error(error: str) -> ErrorResponse:
    """Classify one entry of a generation result's ``errors`` list.

    Args:
        error: Error string as produced by the generator

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if error.startswith(TRANSACTION_FAILED_PREFIX):
        return ErrorResponse(
            code=ErrorCode.ERR_TRANSACTION_FAILED,
            message="Assignments could not be saved. Nothing was generated.",
            suggestion="Retry the request; generation is safe to repeat.",
            severity=ErrorSeverity.HIGH,
            detail=error,
        )

    if error.startswith("Task "):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_RULE_CONFIG,
            message="A task has an incomplete schedule and was skipped.",
            suggestion="Edit the task and fill in its repeat days, rotation type or assigned children.",
            severity=ErrorSeverity.LOW,
            detail=error,
        )

    if "household_id" in error:
        return ErrorResponse(
            code=ErrorCode.ERR_HOUSEHOLD_REQUIRED,
            message="No household was given.",
            suggestion="Pass the household to generate assignments for.",
            severity=ErrorSeverity.MEDIUM,
            detail=error,
        )

    if "days must be between" in error:
        return ErrorResponse(
            code=ErrorCode.ERR_DAYS_OUT_OF_RANGE,
            message="The number of days is out of range.",
            suggestion="Pick a smaller window and try again.",
            severity=ErrorSeverity.LOW,
            detail=error,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
        detail=error,
    )
