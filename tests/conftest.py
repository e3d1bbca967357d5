"""Pytest configuration and shared fixtures."""

import json
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from src.core import db_client
from src.core.config import settings


class HouseholdSeeder:
    """Insert households, children, tasks and assignments, each in its own transaction."""

    async def _insert(self, table: str, values: dict[str, Any]) -> str:
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        async with db_client.transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",  # noqa: S608 - fixed table names
                tuple(values.values()),
            )
            record_id = cursor.lastrowid
        return str(record_id)

    async def household(self, name: str = "Test Household") -> str:
        return await self._insert("households", {"name": name})

    async def child(self, household_id: str, name: str) -> str:
        return await self._insert("children", {"household_id": int(household_id), "name": name})

    async def task(
        self,
        household_id: str,
        *,
        name: str,
        rule_type: str,
        rule_config: dict[str, Any] | str | None = None,
        active: bool = True,
    ) -> str:
        if rule_config is None:
            rule_config = {}
        return await self._insert(
            "tasks",
            {
                "household_id": int(household_id),
                "name": name,
                "rule_type": rule_type,
                "rule_config": rule_config if isinstance(rule_config, str) else json.dumps(rule_config),
                "active": int(active),
            },
        )

    async def assignment(
        self,
        household_id: str,
        task_id: str,
        day: date,
        *,
        child_id: str | None = None,
        status: str = "pending",
    ) -> str:
        return await self._insert(
            "task_assignments",
            {
                "household_id": int(household_id),
                "task_id": int(task_id),
                "child_id": None if child_id is None else int(child_id),
                "date": day.isoformat(),
                "status": status,
            },
        )


@pytest.fixture
async def sqlite_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[Path]:
    """Point the app at a fresh SQLite file with the schema applied."""
    db_path = tmp_path / "test.db"
    monkeypatch.setattr(settings, "sqlite_db_path", str(db_path))

    await db_client.init_db()
    yield db_path
    await db_client.close_connection()


@pytest.fixture
async def seed(sqlite_db: Path) -> HouseholdSeeder:
    """Seeder bound to the temporary database."""
    return HouseholdSeeder()


async def list_assignments(household_id: str | None = None) -> list[dict[str, Any]]:
    """All stored assignments, optionally of one household, in date order."""
    filter_query = f'household_id = "{household_id}"' if household_id else ""
    return await db_client.list_records(
        collection="task_assignments",
        filter_query=filter_query,
        sort="date ASC, task_id ASC, id ASC",
        per_page=10000,
    )


@pytest.fixture
def stored_assignments():
    """Reader for the task_assignments table."""
    return list_assignments
