"""Tests for the SQLite client: filter parsing, listing and transactions."""

import aiosqlite
import pytest

from src.core import db_client


@pytest.mark.unit
class TestParseFilter:
    """Test suite for filter query parsing."""

    def test_empty_filter(self):
        """Test that an empty filter produces no clause."""
        assert db_client.parse_filter("") == ("", [])

    def test_and_conditions(self):
        """Test that && joins comparisons with AND and converts numbers."""
        clause, params = db_client.parse_filter('household_id = "3" && date >= "2024-01-01"')

        assert clause == "household_id = ? AND date >= ?"
        assert params == [3, "2024-01-01"]

    def test_or_group(self):
        """Test that a parenthesized group becomes an OR clause."""
        clause, params = db_client.parse_filter('household_id = "3" && (status = "pending" || status = "overdue")')

        assert clause == "household_id = ? AND (status = ? OR status = ?)"
        assert params == [3, "pending", "overdue"]

    def test_two_character_operators(self):
        """Test that <= and != are not mistaken for < and =."""
        clause, _ = db_client.parse_filter('date <= "2024-01-07" && status != "completed"')

        assert clause == "date <= ? AND status != ?"

    def test_boolean_values(self):
        """Test that true/false are bound as booleans."""
        _, params = db_client.parse_filter('active = "true"')

        assert params == [True]

    def test_like_operator_escapes_wildcards(self):
        """Test that ~ becomes an escaped LIKE match."""
        clause, params = db_client.parse_filter('name ~ "50%_off"')

        assert clause == "name LIKE ? ESCAPE '\\'"
        assert params == ["%50\\%\\_off%"]

    def test_invalid_syntax(self):
        """Test that malformed comparisons are rejected."""
        with pytest.raises(ValueError, match="Invalid filter syntax"):
            db_client.parse_filter("household_id == 3")


@pytest.mark.unit
class TestListRecords:
    """Test suite for list_records."""

    async def test_ids_come_back_as_strings(self, seed):
        """Test that id and foreign key columns are returned as strings."""
        household_id = await seed.household("Home")
        await seed.child(household_id, "Ada")

        records = await db_client.list_records(collection="children")

        assert records[0]["name"] == "Ada"
        assert records[0]["household_id"] == household_id
        assert isinstance(records[0]["id"], str)

    async def test_filter_and_sort(self, seed):
        """Test listing with a filter and a multi-column sort."""
        for name in ["Beta", "Alpha", "Gamma"]:
            await seed.household(name)

        records = await db_client.list_records(
            collection="households",
            filter_query='name != "Gamma"',
            sort="name ASC, id DESC",
        )

        assert [r["name"] for r in records] == ["Alpha", "Beta"]

    async def test_pagination(self, seed):
        """Test that page and per_page select a slice in sort order."""
        for name in ["A", "B", "C"]:
            await seed.household(name)

        records = await db_client.list_records(collection="households", page=2, per_page=2, sort="name ASC")

        assert [r["name"] for r in records] == ["C"]

    async def test_invalid_sort_falls_back_to_id(self, seed):
        """Test that an unsafe sort expression is ignored."""
        for name in ["Beta", "Alpha"]:
            await seed.household(name)

        records = await db_client.list_records(collection="households", sort="name; DROP TABLE tasks")

        assert [r["name"] for r in records] == ["Beta", "Alpha"]

    async def test_invalid_collection_name(self, sqlite_db):
        """Test that unsafe collection names are rejected."""
        with pytest.raises(RuntimeError, match="Invalid collection name"):
            await db_client.list_records(collection="households; DROP TABLE tasks")


@pytest.mark.unit
class TestTransaction:
    """Test suite for the transaction context manager."""

    async def test_commit_on_success(self, sqlite_db):
        """Test that statements are committed when the block exits normally."""
        async with db_client.transaction() as conn:
            await conn.execute("INSERT INTO households (name) VALUES (?)", ("Home",))

        records = await db_client.list_records(collection="households")
        assert [r["name"] for r in records] == ["Home"]

    async def test_rollback_on_error(self, sqlite_db):
        """Test that an exception undoes every statement of the block."""
        with pytest.raises(RuntimeError, match="boom"):
            async with db_client.transaction() as conn:
                await conn.execute("INSERT INTO households (name) VALUES (?)", ("Home",))
                raise RuntimeError("boom")

        assert await db_client.list_records(collection="households") == []

    async def test_partial_unique_indexes(self, sqlite_db):
        """Test that household-wide and per-child rows are unique per task and date."""
        async with db_client.transaction() as conn:
            await conn.execute("INSERT INTO households (name) VALUES ('Home')")
            await conn.execute("INSERT INTO children (household_id, name) VALUES (1, 'Ada')")
            await conn.execute("INSERT INTO tasks (household_id, name, rule_type) VALUES (1, 'Dishes', 'daily')")
            await conn.execute(
                "INSERT INTO task_assignments (household_id, task_id, child_id, date) VALUES (1, 1, NULL, '2024-01-01')"
            )
            # Same task and date for a child is a different assignment
            await conn.execute(
                "INSERT INTO task_assignments (household_id, task_id, child_id, date) VALUES (1, 1, 1, '2024-01-01')"
            )

        with pytest.raises(aiosqlite.IntegrityError):
            async with db_client.transaction() as conn:
                await conn.execute(
                    "INSERT INTO task_assignments (household_id, task_id, child_id, date)"
                    " VALUES (1, 1, NULL, '2024-01-01')"
                )

        with pytest.raises(aiosqlite.IntegrityError):
            async with db_client.transaction() as conn:
                await conn.execute(
                    "INSERT INTO task_assignments (household_id, task_id, child_id, date)"
                    " VALUES (1, 1, 1, '2024-01-01')"
                )
