"""Error types shared by the period engine, storage and bot layers."""


class GoalTrioError(Exception):
    """Base class for errors that can be reported back to the user."""


class InvalidTimestamp(GoalTrioError):
    """An epoch-millisecond value that cannot be turned into a local instant."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid timestamp: {value!r}")


class InvalidLevel(GoalTrioError):
    """An unrecognized period level string."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid level: {value!r}")


class InvalidWeekStartConfig(GoalTrioError):
    """A week-start day outside 1 (Sunday) .. 7 (Saturday)."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid week start: {value!r} (expected 1-7)")


class StorageUnavailable(GoalTrioError):
    """The underlying database read or write failed."""


class GoalLimitReached(GoalTrioError):
    """The active period already holds the maximum number of goals."""

    def __init__(self, level: str, limit: int):
        self.level = level
        self.limit = limit
        super().__init__(f"Maximum {limit} {level} goals per period")
