"""SQLite schema management (code-first approach)."""

import logging

from src.core.db_client import get_connection


logger = logging.getLogger(__name__)


# Children and households are owned by the member-management side of the product;
# the generator only needs them to exist so foreign keys resolve.
TABLE_SCHEMAS: dict[str, str] = {
    "households": """CREATE TABLE IF NOT EXISTS households (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        name TEXT NOT NULL
    )""",
    "children": """CREATE TABLE IF NOT EXISTS children (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        household_id INTEGER NOT NULL REFERENCES households(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        birth_year INTEGER
    )""",
    "tasks": """CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        household_id INTEGER NOT NULL REFERENCES households(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        description TEXT,
        points INTEGER NOT NULL DEFAULT 10,
        rule_type TEXT NOT NULL
            CHECK (rule_type IN ('daily', 'repeating', 'weekly_rotation', 'single')),
        rule_config TEXT NOT NULL DEFAULT '{}',
        active INTEGER NOT NULL DEFAULT 1
    )""",
    "task_assignments": """CREATE TABLE IF NOT EXISTS task_assignments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL DEFAULT (datetime('now')),
        updated TEXT NOT NULL DEFAULT (datetime('now')),
        household_id INTEGER NOT NULL REFERENCES households(id) ON DELETE CASCADE,
        task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
        child_id INTEGER REFERENCES children(id) ON DELETE CASCADE,
        date TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'pending'
            CHECK (status IN ('pending', 'completed', 'overdue'))
    )""",
}

INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_children_household ON children (household_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_household_active ON tasks (household_id, active)",
    "CREATE INDEX IF NOT EXISTS idx_task_assignments_household_date ON task_assignments (household_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_task_assignments_task_date ON task_assignments (task_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_task_assignments_child_date_status ON task_assignments (child_id, date, status)",
    # One row per (task, date) for household-wide assignments ...
    """CREATE UNIQUE INDEX IF NOT EXISTS idx_task_assignments_unique_without_child
        ON task_assignments (task_id, date) WHERE child_id IS NULL""",
    # ... and one row per (task, child, date) otherwise.
    """CREATE UNIQUE INDEX IF NOT EXISTS idx_task_assignments_unique_with_child
        ON task_assignments (task_id, child_id, date) WHERE child_id IS NOT NULL""",
]


async def init_db(*, db_path: str | None = None) -> None:
    """Create all tables and indexes if they do not exist yet."""
    conn = await get_connection(db_path=db_path)

    for table_name, ddl in TABLE_SCHEMAS.items():
        await conn.execute(ddl)
        logger.debug("Ensured table", extra={"table": table_name})

    for ddl in INDEXES:
        await conn.execute(ddl)

    await conn.commit()
    logger.info("Database schema initialized", extra={"tables": list(TABLE_SCHEMAS)})
