"""Headline KPI metrics with short trend sparklines."""

from dataclasses import dataclass
from enum import StrEnum

from salescast.utils.random import RandomSource, resolve
from salescast.utils.types import InvalidArgument


class TrendDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    VOLATILE = "volatile"
    STABLE = "stable"


class MetricFormat(StrEnum):
    CURRENCY = "currency"
    PERCENT = "percent"
    NUMBER = "number"


@dataclass(frozen=True)
class KpiMetric:
    id: str
    name: str
    value: float
    previous_value: float
    change: float
    change_percent: float
    trend: list[int]
    format: MetricFormat
    color: str


@dataclass(frozen=True)
class _KpiSpec:
    id: str
    name: str
    value_range: tuple[float, float]
    previous_range: tuple[float, float]
    direction: TrendDirection
    format: MetricFormat
    decimals: int | None = None  # None draws integers
    lower_is_better: bool = False


_KPI_SPECS = [
    _KpiSpec("revenue", "Total Revenue", (1_500_000, 2_500_000), (1_400_000, 2_300_000),
             TrendDirection.UP, MetricFormat.CURRENCY),
    _KpiSpec("profit", "Net Profit", (300_000, 700_000), (280_000, 650_000),
             TrendDirection.UP, MetricFormat.CURRENCY),
    _KpiSpec("margin", "Profit Margin", (15, 35), (14, 33),
             TrendDirection.STABLE, MetricFormat.PERCENT, decimals=1),
    _KpiSpec("customers", "Active Customers", (15_000, 25_000), (14_000, 24_000),
             TrendDirection.UP, MetricFormat.NUMBER),
    _KpiSpec("orders", "Orders", (40_000, 60_000), (38_000, 58_000),
             TrendDirection.VOLATILE, MetricFormat.NUMBER),
    _KpiSpec("aov", "Avg. Order Value", (120, 200), (115, 190),
             TrendDirection.STABLE, MetricFormat.CURRENCY),
    _KpiSpec("conversion", "Conversion Rate", (2, 5), (1.8, 4.8),
             TrendDirection.VOLATILE, MetricFormat.PERCENT, decimals=2),
    _KpiSpec("cac", "Customer Acq. Cost", (30, 70), (32, 75),
             TrendDirection.DOWN, MetricFormat.CURRENCY, lower_is_better=True),
]

_STEP_BANDS = {
    TrendDirection.UP: (1.01, 1.05),
    TrendDirection.DOWN: (0.95, 0.99),
    TrendDirection.VOLATILE: (0.92, 1.08),
    TrendDirection.STABLE: (0.99, 1.01),
}


def generate_trend(
    points: int = 7,
    direction: TrendDirection | str = TrendDirection.VOLATILE,
    rng: RandomSource | None = None,
) -> list[int]:
    """Random walk from 100 whose step band depends on ``direction``."""
    if points < 0:
        raise InvalidArgument(f"points must be non-negative, got {points}")
    try:
        low, high = _STEP_BANDS[TrendDirection(direction)]
    except ValueError:
        raise InvalidArgument(f"Unknown trend direction: {direction!r}") from None

    rng = resolve(rng)
    current = 100.0
    trend = []
    for _ in range(points):
        current *= rng.random_float(low, high)
        trend.append(round(current))
    return trend


def _draw(spec_range: tuple[float, float], decimals: int | None, rng: RandomSource) -> float:
    low, high = spec_range
    match decimals:
        case None:
            return rng.random_int(int(low), int(high))
        case places:
            return rng.random_float(low, high, places)


def _color(change: float, lower_is_better: bool) -> str:
    improved = change < 0 if lower_is_better else change > 0
    return "success" if improved else "error"


def generate_kpi_metrics(rng: RandomSource | None = None) -> list[KpiMetric]:
    rng = resolve(rng)
    metrics = []
    for spec in _KPI_SPECS:
        value = _draw(spec.value_range, spec.decimals, rng)
        previous = _draw(spec.previous_range, spec.decimals, rng)
        change = value - previous
        metrics.append(KpiMetric(
            id=spec.id,
            name=spec.name,
            value=value,
            previous_value=previous,
            change=change,
            change_percent=round(change / previous * 100, 1),
            trend=generate_trend(7, spec.direction, rng),
            format=spec.format,
            color=_color(change, spec.lower_is_better),
        ))
    return metrics
