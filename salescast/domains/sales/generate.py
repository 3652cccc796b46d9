"""Synthetic sales history built from seasonal, weekday and trend factors."""

from dataclasses import fields
from datetime import date

import pandas as pd

from salescast.domains.sales.models import SalesDataPoint
from salescast.domains.sales.seasonality import (
    draw_annual_growth,
    seasonal_factor,
    trend_factor,
    weekday_factor,
)
from salescast.utils.calendar import date_series
from salescast.utils.io import records_to_frame
from salescast.utils.random import RandomSource, resolve
from salescast.utils.types import Interval, InvalidArgument

type SalesSeries = list[SalesDataPoint]

BASE_REVENUE = (10_000, 50_000)
COST_RATIO = (0.4, 0.7)
BASE_TRANSACTIONS = (100, 500)
MARKETING_RATIO = (0.05, 0.15)
JITTER = (0.9, 1.1)
PEAK_MARKETING_JITTER = (1.1, 1.3)


def generate_series(
    start: date | str,
    count: int,
    interval: Interval | str = Interval.DAY,
    rng: RandomSource | None = None,
) -> SalesSeries:
    """Generate ``count`` sales points starting at ``start``.

    The base revenue, cost ratio, transaction volume, marketing ratio and
    annual growth rate are drawn once and held for the whole series. Every
    point then gets its own seasonal, weekday and jitter draws.
    """
    rng = resolve(rng)
    dates = date_series(start, count, interval)
    if not dates:
        return []

    base_revenue = rng.random_int(*BASE_REVENUE)
    base_costs = base_revenue * rng.random_float(*COST_RATIO)
    base_transactions = rng.random_int(*BASE_TRANSACTIONS)
    base_marketing = base_revenue * rng.random_float(*MARKETING_RATIO)
    annual_growth = draw_annual_growth(rng)

    series: SalesSeries = []
    for index, d in enumerate(dates):
        seasonal = seasonal_factor(d, rng)
        weekday = weekday_factor(d, rng)
        trend = trend_factor(index, len(dates), annual_growth)

        revenue = round(base_revenue * seasonal * weekday * trend * rng.random_float(*JITTER))
        # costs follow the season and trend but not the weekday swing
        costs = round(base_costs * seasonal * trend * rng.random_float(*JITTER))
        transactions = round(
            base_transactions * seasonal * weekday * trend * rng.random_float(*JITTER)
        )
        marketing_jitter = PEAK_MARKETING_JITTER if seasonal > 1 else JITTER
        marketing = round(base_marketing * seasonal * trend * rng.random_float(*marketing_jitter))

        series.append(SalesDataPoint(
            date=d,
            revenue=revenue,
            profit=revenue - costs,
            costs=costs,
            transactions=transactions,
            marketing_spend=marketing,
        ))

    return series


def generate_time_series(
    metrics: list[str],
    start: date | str,
    count: int = 30,
    interval: Interval | str = Interval.DAY,
    rng: RandomSource | None = None,
) -> pd.DataFrame:
    """Generate a frame with a ``date`` column plus one integer column per metric."""
    if len(set(metrics)) != len(metrics):
        raise InvalidArgument(f"Duplicate metric names: {metrics}")
    if "date" in metrics:
        raise InvalidArgument("'date' is reserved for the date column")

    rng = resolve(rng)
    dates = date_series(start, count, interval)
    base_values = {metric: rng.random_int(100, 1000) for metric in metrics}

    rows = []
    for index, d in enumerate(dates):
        row: dict = {"date": d}
        for metric in metrics:
            drift = 1 + (index / count) * rng.random_float(-0.2, 0.2)
            row[metric] = round(base_values[metric] * drift * rng.random_float(*JITTER))
        rows.append(row)

    df = pd.DataFrame(rows, columns=["date", *metrics])
    df["date"] = pd.to_datetime(df["date"])
    return df


def to_frame(series: SalesSeries) -> pd.DataFrame:
    return records_to_frame(list(series), columns=[f.name for f in fields(SalesDataPoint)])
