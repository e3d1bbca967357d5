"""Rotation state resolution: which child owns a date or a generation window.

Every function here is pure. History-dependent rotation takes the last known
child as an argument instead of keeping a cursor, so concurrent generation
runs never share mutable state.
"""

from collections.abc import Sequence
from datetime import date


def weekday_number(day: date) -> int:
    """Return the weekday of a calendar date with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def child_at_position(children: Sequence[str], position: int) -> str | None:
    """Return the child at ``position`` of a round-robin over ``children``.

    Returns None when there is nobody to rotate through (household-wide task).
    """
    if not children:
        return None
    return children[position % len(children)]


def odd_even_week_child(children: Sequence[str], first_date: date) -> str:
    """Pick the child for a whole window from the ISO week of its first date.

    Week 1 maps to index 0, week 2 to index 1 and so on, wrapping around the
    list. Only the first date counts, so a window spanning a week boundary
    still has a single owner.
    """
    week_number = first_date.isocalendar().week
    return children[(week_number - 1) % len(children)]


def alternating_child(children: Sequence[str], last_child_id: str | None) -> str:
    """Pick the child following the most recent assignee of the task.

    Starts from the first child when the task has no history, when its last
    assignment was household-wide, or when the last assignee has since been
    removed from the rotation.
    """
    if last_child_id is None or last_child_id not in children:
        return children[0]
    return children[(children.index(last_child_id) + 1) % len(children)]
