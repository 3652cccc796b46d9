"""Calendar stepping for dated series."""

from datetime import date, datetime

import pandas as pd

from salescast.utils.types import Interval, InvalidArgument, parse_interval

_OFFSETS = {
    Interval.DAY: pd.DateOffset(days=1),
    Interval.WEEK: pd.DateOffset(days=7),
    # month steps clamp to the last day of shorter months (Jan 31 -> Feb 29)
    Interval.MONTH: pd.DateOffset(months=1),
}


def _as_date(value: date | str | pd.Timestamp) -> date:
    match value:
        case datetime():
            return value.date()
        case date():
            return value
        case str():
            return pd.Timestamp(value).date()
        case other:
            raise InvalidArgument(f"Not a calendar date: {other!r}")


def next_date(current: date | str, interval: Interval | str) -> date:
    """Advance ``current`` by exactly one interval unit."""
    step = _OFFSETS[parse_interval(interval)]
    return (pd.Timestamp(_as_date(current)) + step).date()


def date_series(
    start: date | str,
    count: int,
    interval: Interval | str = Interval.DAY,
) -> list[date]:
    """Return ``count`` dates beginning at ``start``, each one interval after the last."""
    if count < 0:
        raise InvalidArgument(f"count must be non-negative, got {count}")
    interval = parse_interval(interval)

    dates: list[date] = []
    current = _as_date(start)
    for _ in range(count):
        dates.append(current)
        current = next_date(current, interval)
    return dates


def infer_interval(dates: list[date], default: Interval = Interval.MONTH) -> Interval:
    """Guess the stepping of an existing series from its first two dates."""
    if len(dates) < 2:
        return default

    first, second = _as_date(dates[0]), _as_date(dates[1])
    match (second - first).days:
        case 1:
            return Interval.DAY
        case 7:
            return Interval.WEEK
        case n if 28 <= n <= 31:
            return Interval.MONTH
        case n:
            raise InvalidArgument(f"Series spacing of {n} days matches no interval")
