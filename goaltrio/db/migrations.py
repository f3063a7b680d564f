"""Database migration runner."""

import logging
from pathlib import Path

import aiosqlite

from goaltrio.utils.constants import (
    DEFAULT_WEEK_START,
    LAST_MONTHLY_PROMPT_KEY,
    LAST_PERIOD_CHECK_KEY,
    LAST_WEEKLY_PROMPT_KEY,
    NEVER_CHECKED,
    REFLECTION_PROMPT_ENABLED_KEY,
    WEEK_START_KEY,
)

logger = logging.getLogger(__name__)


def default_settings(
    week_start: int = DEFAULT_WEEK_START, reflection_prompt_enabled: bool = False
) -> dict[str, str]:
    """Settings seeded on first run. Existing values are never overwritten."""
    return {
        WEEK_START_KEY: str(week_start),
        REFLECTION_PROMPT_ENABLED_KEY: "true" if reflection_prompt_enabled else "false",
        LAST_PERIOD_CHECK_KEY: str(NEVER_CHECKED),
        LAST_WEEKLY_PROMPT_KEY: "",
        LAST_MONTHLY_PROMPT_KEY: "",
    }


async def init_database(db_path: Path, defaults: dict[str, str] | None = None) -> None:
    """Initialize the database with the schema and default settings."""
    schema_path = Path(__file__).parent / "schema.sql"

    async with aiosqlite.connect(db_path) as db:
        with open(schema_path) as f:
            schema_sql = f.read()

        await db.executescript(schema_sql)

        for key, value in (defaults or default_settings()).items():
            await db.execute(
                "INSERT OR IGNORE INTO settings (key, value) VALUES (?, ?)", (key, value)
            )
        await db.commit()

        logger.info(f"Database initialized at {db_path}")


async def run_migrations(db_path: Path, defaults: dict[str, str] | None = None) -> None:
    """Run any pending migrations.

    Currently just ensures the database is initialized.
    """
    await init_database(db_path, defaults)
