"""Duplicate filtering of candidate assignments against already persisted ones."""

from collections.abc import Iterable, Set

from src.domain.assignment import AssignmentKey, PendingAssignment


def partition_new_assignments(
    candidates: Iterable[PendingAssignment],
    existing_keys: Set[AssignmentKey],
) -> tuple[list[PendingAssignment], list[PendingAssignment]]:
    """Split candidates into (new, already existing) by identity key.

    Args:
        candidates: Assignments produced by rule expansion
        existing_keys: Identity keys of assignments already stored for the window

    Returns:
        Tuple of (new assignments, assignments that already exist)
    """
    new: list[PendingAssignment] = []
    existing: list[PendingAssignment] = []

    for candidate in candidates:
        if candidate.key in existing_keys:
            existing.append(candidate)
        else:
            new.append(candidate)

    return new, existing
