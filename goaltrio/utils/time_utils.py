"""Calendar period utilities.

All timestamps are epoch milliseconds. Period boundaries are computed in
the system's local time zone unless a zone is passed explicitly, and are
always built from local calendar fields (year/month/day) so DST shifts
never move a boundary.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo

from dateutil import tz as dateutil_tz

from goaltrio.errors import InvalidTimestamp, InvalidWeekStartConfig

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


def local_zone() -> tzinfo:
    """The system's configured local time zone."""
    return dateutil_tz.tzlocal()


def validate_week_start(value: object) -> int:
    """Return the week-start day as an int in 1..7.

    Accepts an int or its decimal string form (as stored in settings).
    """
    if isinstance(value, bool):
        raise InvalidWeekStartConfig(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidWeekStartConfig(value) from None
    if not isinstance(value, int) or not 1 <= value <= 7:
        raise InvalidWeekStartConfig(value)
    return value


def to_local(ms: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to an aware local datetime."""
    if isinstance(ms, bool) or not isinstance(ms, int):
        raise InvalidTimestamp(ms)

    seconds, millis = divmod(ms, 1000)
    try:
        dt = datetime.fromtimestamp(seconds, tz or local_zone())
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidTimestamp(ms) from e
    return dt.replace(microsecond=millis * 1000)


def to_millis(dt: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return (dt - EPOCH) // ONE_MILLISECOND


def local_midnight(day: date, tz: tzinfo | None = None) -> datetime:
    """First instant of `day` in the given (or local) zone.

    Where DST starts at midnight (e.g. America/Santiago) 00:00 does not
    exist and the day begins at 01:00.
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=tz or local_zone())
    return dateutil_tz.resolve_imaginary(midnight)


def week_start_date(dt: datetime, week_start_day: int) -> date:
    """First calendar day of the configured week containing `dt`.

    Weekdays are counted from Sunday=0; `week_start_day` uses the
    1=Sunday .. 7=Saturday numbering.
    """
    current = dt.isoweekday() % 7
    target = (week_start_day - 1) % 7
    days_back = (current - target + 7) % 7
    return dt.date() - timedelta(days=days_back)


def day_start(t: int, tz: tzinfo | None = None) -> int:
    """Midnight local time of the day containing `t`."""
    dt = to_local(t, tz)
    return to_millis(local_midnight(dt.date(), dt.tzinfo))


def week_start(t: int, week_start_day: int, tz: tzinfo | None = None) -> int:
    """Midnight local time of the first day of the week containing `t`."""
    week_start_day = validate_week_start(week_start_day)
    dt = to_local(t, tz)
    return to_millis(local_midnight(week_start_date(dt, week_start_day), dt.tzinfo))


def month_start(t: int, tz: tzinfo | None = None) -> int:
    """Midnight local time of day 1 of the month containing `t`."""
    dt = to_local(t, tz)
    return to_millis(local_midnight(dt.date().replace(day=1), dt.tzinfo))


def same_day(a: int, b: int, tz: tzinfo | None = None) -> bool:
    """True if both instants share calendar year and day-of-year."""
    a_dt, b_dt = to_local(a, tz), to_local(b, tz)
    return (
        a_dt.year == b_dt.year
        and a_dt.timetuple().tm_yday == b_dt.timetuple().tm_yday
    )


def same_week(a: int, b: int, week_start_day: int, tz: tzinfo | None = None) -> bool:
    """True if both instants fall in the same configured week."""
    week_start_day = validate_week_start(week_start_day)
    return week_start_date(to_local(a, tz), week_start_day) == week_start_date(
        to_local(b, tz), week_start_day
    )


def same_month(a: int, b: int, tz: tzinfo | None = None) -> bool:
    """True if both instants share calendar year and month."""
    a_dt, b_dt = to_local(a, tz), to_local(b, tz)
    return a_dt.year == b_dt.year and a_dt.month == b_dt.month


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return to_millis(datetime.now(timezone.utc))
