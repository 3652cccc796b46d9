"""Multiplicative seasonal, weekday and growth-trend factors.

Each factor is positive, so composing any number of them with a positive
base magnitude can never produce a negative value.
"""

from datetime import date

from salescast.utils.random import RandomSource
from salescast.utils.types import InvalidArgument

# (low, high) sampling bands per quarter
Q4_BAND = (1.2, 1.5)
Q1_BAND = (0.7, 0.9)
MID_YEAR_BAND = (0.9, 1.1)

WEEKEND_BAND = (0.7, 1.3)
WEEKDAY_BAND = (0.9, 1.1)

ANNUAL_GROWTH_BAND = (0.05, 0.15)


def quarter_of(d: date) -> int:
    return (d.month - 1) // 3 + 1


def seasonal_factor(d: date, rng: RandomSource) -> float:
    """Boost Q4, depress Q1, keep Q2/Q3 near 1."""
    match quarter_of(d):
        case 4:
            low, high = Q4_BAND
        case 1:
            low, high = Q1_BAND
        case _:
            low, high = MID_YEAR_BAND
    return rng.random_float(low, high)


def weekday_factor(d: date, rng: RandomSource) -> float:
    # weekends swing wider than weekdays
    low, high = WEEKEND_BAND if d.weekday() >= 5 else WEEKDAY_BAND
    return rng.random_float(low, high)


def draw_annual_growth(rng: RandomSource) -> float:
    return rng.random_float(*ANNUAL_GROWTH_BAND)


def growth_per_step(annual_rate: float, total: int) -> float:
    if total <= 0:
        raise InvalidArgument(f"Series length must be positive, got {total}")
    return (1 + annual_rate) ** (1 / total)


def trend_factor(index: int, total: int, annual_rate: float) -> float:
    """Compound growth from 1.0 at index 0 toward ``1 + annual_rate`` at index ``total``."""
    return growth_per_step(annual_rate, total) ** index
