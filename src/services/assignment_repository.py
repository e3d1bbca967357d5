"""Storage queries used by assignment generation.

Every function takes a connection. A generation run passes the one of its
open ``db_client.transaction()`` so it reads and writes inside one unit of work.
"""

import logging
from collections.abc import Sequence
from datetime import date

import aiosqlite

from src.core.db_client import convert_record_ids
from src.domain.assignment import AssignmentKey, AssignmentStatus, PendingAssignment
from src.domain.task import RuleType, Task


logger = logging.getLogger(__name__)


async def list_active_tasks(conn: aiosqlite.Connection, *, household_id: str) -> list[Task]:
    """Load the household's active tasks, except single ones, ordered by name.

    Unknown rule types are loaded too so that expansion reports them per task.
    """
    cursor = await conn.execute(
        """SELECT id, household_id, name, description, points, rule_type, rule_config, active
           FROM tasks
           WHERE household_id = ? AND active = 1 AND rule_type != ?
           ORDER BY name, id""",
        (household_id, RuleType.SINGLE.value),
    )
    rows = await cursor.fetchall()
    columns = [description[0] for description in cursor.description]

    tasks = [Task.model_validate(convert_record_ids(dict(zip(columns, row, strict=True)))) for row in rows]
    logger.debug("Loaded active tasks", extra={"household_id": household_id, "count": len(tasks)})
    return tasks


async def list_generating_household_ids(conn: aiosqlite.Connection) -> list[str]:
    """Ids of households owning at least one active, non-single task, ascending."""
    cursor = await conn.execute(
        """SELECT DISTINCT household_id
           FROM tasks
           WHERE active = 1 AND rule_type != ?
           ORDER BY household_id""",
        (RuleType.SINGLE.value,),
    )
    rows = await cursor.fetchall()
    return [str(household_id) for (household_id,) in rows]


async def get_existing_keys(
    conn: aiosqlite.Connection,
    *,
    household_id: str,
    start_date: date,
    end_date: date,
) -> set[AssignmentKey]:
    """Identity keys of the household's assignments dated within [start_date, end_date]."""
    cursor = await conn.execute(
        """SELECT task_id, date, child_id
           FROM task_assignments
           WHERE household_id = ? AND date >= ? AND date <= ?""",
        (household_id, start_date.isoformat(), end_date.isoformat()),
    )
    rows = await cursor.fetchall()

    return {
        AssignmentKey(
            task_id=str(task_id),
            date=date.fromisoformat(day),
            child_id=None if child_id is None else str(child_id),
        )
        for task_id, day, child_id in rows
    }


async def get_last_assigned_child(conn: aiosqlite.Connection, task_id: str, before: date) -> str | None:
    """Child of the task's most recent assignment dated before ``before``.

    Rows on or after ``before`` belong to the window being generated and never
    advance the rotation, so rerunning a window resolves the same child.
    Returns None when the task has no earlier assignment or the latest one is
    household-wide.
    """
    cursor = await conn.execute(
        """SELECT child_id
           FROM task_assignments
           WHERE task_id = ? AND date < ?
           ORDER BY date DESC, id DESC
           LIMIT 1""",
        (task_id, before.isoformat()),
    )
    row = await cursor.fetchone()

    if row is None or row[0] is None:
        return None
    return str(row[0])


async def insert_assignments(conn: aiosqlite.Connection, assignments: Sequence[PendingAssignment]) -> int:
    """Insert pending assignments, skipping any that collide with a stored one.

    Returns:
        Number of rows actually inserted
    """
    if not assignments:
        return 0

    cursor = await conn.executemany(
        """INSERT INTO task_assignments (household_id, task_id, child_id, date, status)
           VALUES (?, ?, ?, ?, ?)
           ON CONFLICT DO NOTHING""",
        [
            (a.household_id, a.task_id, a.child_id, a.date.isoformat(), AssignmentStatus.PENDING.value)
            for a in assignments
        ],
    )
    inserted = cursor.rowcount

    if inserted < len(assignments):
        logger.info(
            "Skipped conflicting assignments on insert",
            extra={"attempted": len(assignments), "inserted": inserted},
        )
    return inserted
