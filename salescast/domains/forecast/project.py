"""Project a historical series forward with one of the catalog models."""

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from salescast.domains.forecast.models import (
    MODELS,
    ForecastModel,
    ForecastPoint,
    Historical,
    Projected,
    get_model,
)
from salescast.domains.forecast.regression import fit
from salescast.domains.sales.seasonality import quarter_of
from salescast.utils.calendar import date_series, infer_interval
from salescast.utils.types import Interval, InvalidArgument, ParamMapping, parse_interval

type Forecast = list[Projected]

# Quarterly multipliers the linear model scales by its seasonality parameter.
# Q2 is left unadjusted.
LINEAR_QUARTER_FACTORS = {1: 0.85, 3: 1.1, 4: 1.3}

# Growth factor the linear model runs at for each what-if scenario.
SCENARIO_GROWTH = {"Pessimistic": 0.9, "Base Case": 1.0, "Optimistic": 1.1}

BASE_BAND = 0.05
BAND_GROWTH_PER_PERIOD = 0.01


def band_fraction(offset: int) -> float:
    """Half-width of the uncertainty band as a fraction of the projected value."""
    return BASE_BAND + BAND_GROWTH_PER_PERIOD * offset


def _resolve_params(model: ForecastModel, params: Mapping[str, float] | None) -> ParamMapping:
    resolved = model.defaults()
    for name, value in (params or {}).items():
        if name not in resolved:
            raise InvalidArgument(f"Model '{model.id}' has no parameter '{name}'")
        resolved[name] = float(value)
    return resolved


def _adjustment(
    model_id: str,
    target: date,
    offset: int,
    periods: int,
    params: ParamMapping,
) -> float:
    match model_id:
        case "linear":
            quarter = LINEAR_QUARTER_FACTORS.get(quarter_of(target))
            seasonal = params["seasonality"] * quarter if quarter is not None else 1.0
            return seasonal * params["growth"]
        case "exponential":
            growth = (1 + params["growthRate"]) ** offset
            saturation = 1 - (offset / (2 * periods)) ** 2 * (1 - params["saturation"])
            return growth * saturation
        case "seasonal":
            match quarter_of(target):
                case 1:
                    return params["q1Factor"]
                case 4:
                    return params["q4Factor"]
                case _:
                    return 1.0
        case other:
            raise InvalidArgument(f"No adjustment defined for model '{other}'")


def project(
    history: Sequence[Any],
    model_id: str,
    periods: int,
    params: Mapping[str, float] | None = None,
    interval: Interval | str | None = None,
) -> Forecast:
    """Extend ``history`` by ``periods`` projected points.

    ``history`` holds records exposing ``date`` and ``value``. The regression
    line is evaluated past the last historical index and then scaled by the
    model's adjustment. Missing parameters fall back to the model defaults.
    When ``interval`` is omitted it is inferred from the history's spacing.
    Forecast dates chain one interval at a time from the last historical date,
    so a month-end anchor that clamps into February stays on the clamped day.
    """
    if len(history) == 0:
        raise InvalidArgument("Cannot project an empty history")
    if periods < 0:
        raise InvalidArgument(f"periods must be non-negative, got {periods}")

    model = get_model(model_id)
    resolved = _resolve_params(model, params)
    if interval is None:
        interval = infer_interval([point.date for point in history])
    else:
        interval = parse_interval(interval)

    regression = fit(history)
    last_index = len(history) - 1
    future = date_series(history[-1].date, periods + 1, interval)[1:]

    forecast: Forecast = []
    for offset, target in enumerate(future, start=1):
        value = regression.predict(last_index + offset)
        value *= _adjustment(model.id, target, offset, periods, resolved)
        width = abs(value) * band_fraction(offset)
        forecast.append(Projected(
            date=target,
            value=value,
            lower=value - width,
            upper=value + width,
            model_id=model.id,
        ))
    return forecast


def compare_models(
    history: Sequence[Any],
    periods: int,
    params_by_model: Mapping[str, Mapping[str, float]] | None = None,
    interval: Interval | str | None = None,
) -> dict[str, Forecast]:
    """Project ``history`` with every catalog model."""
    params_by_model = params_by_model or {}
    unknown = set(params_by_model) - set(MODELS)
    if unknown:
        raise InvalidArgument(f"Unknown forecast models: {sorted(unknown)}")

    return {
        model_id: project(history, model_id, periods, params_by_model.get(model_id), interval)
        for model_id in MODELS
    }


def scenario_forecasts(
    history: Sequence[Any],
    periods: int,
    seasonality: float = 1.0,
    interval: Interval | str | None = None,
) -> dict[str, Forecast]:
    """Linear projections at the pessimistic, base and optimistic growth factors."""
    return {
        name: project(history, "linear", periods,
                      {"seasonality": seasonality, "growth": growth}, interval)
        for name, growth in SCENARIO_GROWTH.items()
    }


def history_points(series: Sequence[Any]) -> list[Historical]:
    return [Historical(date=point.date, value=point.value) for point in series]


def combine(history: Sequence[Any], forecast: Forecast) -> list[ForecastPoint]:
    """Historical points followed by the forecast, ready for charting or export."""
    return [*history_points(history), *forecast]
