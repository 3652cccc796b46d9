"""Shared type definitions."""

from enum import StrEnum


type ParamMapping = dict[str, float]
type ValidationOutcome = dict[str, bool | str | list[str]]


class InvalidArgument(ValueError):
    """Raised when a caller passes arguments outside an operation's contract."""


class Interval(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def parse_interval(value: "Interval | str") -> Interval:
    try:
        return Interval(value)
    except ValueError:
        raise InvalidArgument(f"Unknown interval: {value!r}") from None
