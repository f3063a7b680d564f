"""Configuration management from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

from goaltrio.utils.constants import DEFAULT_CHECK_INTERVAL, DEFAULT_WEEK_START

# Load .env file if it exists
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Telegram
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

    # Database
    DATABASE_PATH: Path = Path(os.getenv("DATABASE_PATH", "./data/goaltrio.db"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Reflection reminder
    REFLECTION_CHECK_INTERVAL: int = int(
        os.getenv("REFLECTION_CHECK_INTERVAL", str(DEFAULT_CHECK_INTERVAL))
    )
    REFLECTION_PROMPT_DEFAULT: bool = (
        os.getenv("REFLECTION_PROMPT_DEFAULT", "false").lower() == "true"
    )

    # Calendar
    DEFAULT_WEEK_START: str = os.getenv("DEFAULT_WEEK_START", str(DEFAULT_WEEK_START))

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if not cls.TELEGRAM_BOT_TOKEN:
            raise ValueError("TELEGRAM_BOT_TOKEN environment variable is required")

        if cls.DEFAULT_WEEK_START.strip() not in {str(d) for d in range(1, 8)}:
            raise ValueError("DEFAULT_WEEK_START must be 1 (Sunday) to 7 (Saturday)")

        if cls.REFLECTION_CHECK_INTERVAL <= 0:
            raise ValueError("REFLECTION_CHECK_INTERVAL must be positive")

        # Ensure database directory exists
        cls.DATABASE_PATH.parent.mkdir(parents=True, exist_ok=True)
