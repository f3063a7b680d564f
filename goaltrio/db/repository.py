"""Database repository - all SQL queries."""

import functools
import logging
from pathlib import Path
from typing import List

import aiosqlite

from goaltrio.db.models import Goal, Reflection
from goaltrio.engine.periods import PeriodLevel
from goaltrio.errors import StorageUnavailable

logger = logging.getLogger(__name__)


def storage_operation(func):
    """Re-raise SQLite failures as StorageUnavailable."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except aiosqlite.Error as e:
            raise StorageUnavailable(f"{func.__name__} failed: {e}") from e

    return wrapper


class Repository:
    """Database access layer."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open database connection."""
        self._db = await aiosqlite.connect(self.db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.execute("PRAGMA foreign_keys = ON")
        logger.info(f"Connected to database at {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._db:
            await self._db.close()
            self._db = None
            logger.info("Database connection closed")

    @property
    def db(self) -> aiosqlite.Connection:
        """Get the database connection."""
        if self._db is None:
            raise StorageUnavailable("Database not connected")
        return self._db

    # Settings operations

    @storage_operation
    async def get_setting(self, key: str) -> str | None:
        """Get a setting value, or None if it has never been set."""
        async with self.db.execute(
            "SELECT value FROM settings WHERE key = ?", (key,)
        ) as cursor:
            row = await cursor.fetchone()
            return row["value"] if row else None

    @storage_operation
    async def set_setting(self, key: str, value: str) -> None:
        """Insert or overwrite a setting."""
        await self.db.execute(
            "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, value)
        )
        await self.db.commit()

    @storage_operation
    async def get_all_settings(self) -> dict[str, str]:
        """Get every setting as a dict."""
        async with self.db.execute("SELECT key, value FROM settings") as cursor:
            rows = await cursor.fetchall()
            return {row["key"]: row["value"] for row in rows}

    # Goal operations

    @storage_operation
    async def get_goals(self, level: PeriodLevel | None = None) -> List[Goal]:
        """Get all goals, optionally filtered by level, oldest first."""
        if level:
            query = "SELECT * FROM goals WHERE level = ? ORDER BY created_at ASC"
            params: tuple = (level.value,)
        else:
            query = "SELECT * FROM goals ORDER BY created_at ASC"
            params = ()

        async with self.db.execute(query, params) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_goal(row) for row in rows]

    @storage_operation
    async def get_goal(self, goal_id: str) -> Goal | None:
        """Get a goal by ID."""
        async with self.db.execute(
            "SELECT * FROM goals WHERE id = ?", (goal_id,)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return self._row_to_goal(row)
            return None

    @storage_operation
    async def add_goal(self, goal: Goal) -> Goal:
        """Create a new goal."""
        await self.db.execute(
            """
            INSERT INTO goals (
                id, title, level, is_completed, completed_at, created_at,
                period_start, parent_goal_id, note
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                goal.id,
                goal.title,
                goal.level.value,
                1 if goal.is_completed else 0,
                goal.completed_at,
                goal.created_at,
                goal.period_start,
                goal.parent_goal_id,
                goal.note,
            ),
        )
        await self.db.commit()
        return goal

    @storage_operation
    async def update_goal_title(self, goal_id: str, title: str) -> None:
        """Rename a goal."""
        await self.db.execute("UPDATE goals SET title = ? WHERE id = ?", (title, goal_id))
        await self.db.commit()

    @storage_operation
    async def toggle_goal_completion(self, goal_id: str, now: int) -> Goal | None:
        """Flip a goal's completion flag. Returns the updated goal."""
        async with self.db.execute(
            "SELECT is_completed FROM goals WHERE id = ?", (goal_id,)
        ) as cursor:
            row = await cursor.fetchone()
            if row is None:
                return None

        completed = not bool(row["is_completed"])
        await self.db.execute(
            "UPDATE goals SET is_completed = ?, completed_at = ? WHERE id = ?",
            (1 if completed else 0, now if completed else None, goal_id),
        )
        await self.db.commit()
        return await self.get_goal(goal_id)

    @storage_operation
    async def delete_goal(self, goal_id: str) -> None:
        """Delete a goal."""
        await self.db.execute("DELETE FROM goals WHERE id = ?", (goal_id,))
        await self.db.commit()

    # Reflection operations

    @storage_operation
    async def get_reflection(
        self, level: PeriodLevel, period_key: str
    ) -> Reflection | None:
        """Get the reflection for one level and period."""
        async with self.db.execute(
            "SELECT * FROM reflections WHERE level = ? AND period_key = ?",
            (level.value, period_key),
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return self._row_to_reflection(row)
            return None

    @storage_operation
    async def save_reflection(self, reflection: Reflection) -> Reflection:
        """Save or update the reflection for its (level, period_key)."""
        await self.db.execute(
            """
            INSERT INTO reflections (
                level, period_key, insight_1, insight_2, insight_3, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(level, period_key) DO UPDATE SET
                insight_1 = excluded.insight_1,
                insight_2 = excluded.insight_2,
                insight_3 = excluded.insight_3
            """,
            (
                reflection.level.value,
                reflection.period_key,
                reflection.insight_1,
                reflection.insight_2,
                reflection.insight_3,
                reflection.created_at,
            ),
        )
        await self.db.commit()

        saved = await self.get_reflection(reflection.level, reflection.period_key)
        if saved is None:
            raise StorageUnavailable("Reflection vanished after save")
        return saved

    @storage_operation
    async def get_reflections_by_level(self, level: PeriodLevel) -> List[Reflection]:
        """Get all reflections for a level, newest first."""
        async with self.db.execute(
            "SELECT * FROM reflections WHERE level = ? ORDER BY created_at DESC",
            (level.value,),
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_reflection(row) for row in rows]

    # Helper methods

    def _row_to_goal(self, row: aiosqlite.Row) -> Goal:
        """Convert a database row to a Goal object."""
        return Goal(
            id=row["id"],
            title=row["title"],
            level=PeriodLevel.from_stored(row["level"]),
            is_completed=bool(row["is_completed"]),
            completed_at=row["completed_at"],
            created_at=row["created_at"],
            period_start=row["period_start"],
            parent_goal_id=row["parent_goal_id"],
            note=row["note"],
        )

    def _row_to_reflection(self, row: aiosqlite.Row) -> Reflection:
        """Convert a database row to a Reflection object."""
        return Reflection(
            id=row["id"],
            level=PeriodLevel.from_stored(row["level"]),
            period_key=row["period_key"],
            insight_1=row["insight_1"],
            insight_2=row["insight_2"],
            insight_3=row["insight_3"],
            created_at=row["created_at"],
        )
