"""Ordinary least squares of a series' value against its position index."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

import numpy as np


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * x


def _values(series: Sequence[Any]) -> np.ndarray:
    ys = []
    for point in series:
        match point:
            case int() | float() | np.number():
                ys.append(float(point))
            case _:
                ys.append(float(point.value))
    return np.asarray(ys, dtype=float)


def fit(series: Sequence[Any]) -> RegressionResult:
    """Fit ``value = intercept + slope * index`` over ``series``.

    Points may be plain numbers or records exposing ``.value``. Fewer than two
    points give a zero slope and zero intercept; a zero denominator otherwise
    gives a zero slope and the mean as intercept.
    """
    y = _values(series)
    n = len(y)
    if n < 2:
        return RegressionResult(slope=0.0, intercept=0.0)

    x = np.arange(n, dtype=float)
    sum_x, sum_y = x.sum(), y.sum()
    sum_xy, sum_xx = (x * y).sum(), (x * x).sum()

    denominator = n * sum_xx - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return RegressionResult(slope=float(slope), intercept=float(intercept))


@dataclass(frozen=True)
class Residual:
    index: int
    date: date | None
    actual: float
    predicted: float

    @property
    def residual(self) -> float:
        return self.actual - self.predicted


def residuals(series: Sequence[Any], result: RegressionResult | None = None) -> list[Residual]:
    """Distance of each point from the fitted trend line.

    Fits ``series`` unless a ``result`` is supplied. Plain numbers get no date.
    """
    result = result if result is not None else fit(series)
    return [
        Residual(
            index=index,
            date=getattr(point, "date", None),
            actual=float(y),
            predicted=result.predict(index),
        )
        for index, (point, y) in enumerate(zip(series, _values(series)))
    ]
