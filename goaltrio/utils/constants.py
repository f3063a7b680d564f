"""Constants and default values."""

# Setting keys (settings table, values always stored as strings)
REFLECTION_PROMPT_ENABLED_KEY = "reflection_prompt_enabled"
LAST_PERIOD_CHECK_KEY = "last_period_check_timestamp"
WEEK_START_KEY = "week_start"
LAST_WEEKLY_PROMPT_KEY = "last_weekly_reflection_prompt"
LAST_MONTHLY_PROMPT_KEY = "last_monthly_reflection_prompt"
OWNER_CHAT_ID_KEY = "owner_chat_id"

# 0 means "never checked"
NEVER_CHECKED = 0

# Week start days, 1=Sunday .. 7=Saturday
WEEKDAY_NAMES = {
    1: "Sunday",
    2: "Monday",
    3: "Tuesday",
    4: "Wednesday",
    5: "Thursday",
    6: "Friday",
    7: "Saturday",
}
DEFAULT_WEEK_START = 2

# Limits
MAX_GOALS_PER_PERIOD = 3
MAX_TITLE_LENGTH = 200
MAX_INSIGHTS = 3
MAX_INSIGHT_LENGTH = 1000

# Background check interval (seconds)
DEFAULT_CHECK_INTERVAL = 300

