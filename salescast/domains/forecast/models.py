"""Forecast model catalog and forecast point types."""

import math
from dataclasses import dataclass, replace
from datetime import date

from pandera import Check, Column, DataFrameSchema

from salescast.utils.types import InvalidArgument, ParamMapping

AVERAGE_ORDER_VALUE = 120
_STEP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ModelParam:
    id: str
    name: str
    value: float
    min: float
    max: float
    step: float
    description: str = ""

    def accepts(self, value: float) -> bool:
        if not self.min <= value <= self.max:
            return False
        steps = (value - self.min) / self.step
        return math.isclose(steps, round(steps), abs_tol=_STEP_TOLERANCE)


@dataclass(frozen=True)
class ForecastModel:
    id: str
    name: str
    description: str
    accuracy: float
    params: tuple[ModelParam, ...]

    def param(self, param_id: str) -> ModelParam:
        for p in self.params:
            if p.id == param_id:
                return p
        raise InvalidArgument(f"Model '{self.id}' has no parameter '{param_id}'")

    def defaults(self) -> ParamMapping:
        return {p.id: p.value for p in self.params}

    def set_param(self, param_id: str, value: float) -> "ForecastModel":
        """Return a copy with one parameter changed, rejecting off-range or off-step values."""
        current = self.param(param_id)
        if not current.accepts(value):
            raise InvalidArgument(
                f"{self.id}.{param_id}={value} must lie in [{current.min}, {current.max}] "
                f"in steps of {current.step}"
            )
        params = tuple(replace(p, value=value) if p.id == param_id else p for p in self.params)
        return replace(self, params=params)


MODELS: dict[str, ForecastModel] = {
    "linear": ForecastModel(
        id="linear",
        name="Linear Trend",
        description="Projects future values along the least-squares trend of the history",
        accuracy=0.85,
        params=(
            ModelParam("seasonality", "Seasonality Factor", 1.0, 0.5, 1.5, 0.1,
                       "Scales the quarterly seasonal swings"),
            ModelParam("growth", "Growth Factor", 1.0, 0.8, 1.2, 0.05,
                       "Scales the overall projected level"),
        ),
    ),
    "exponential": ForecastModel(
        id="exponential",
        name="Exponential Growth",
        description="Compounds a per-period growth rate, dampened as the market saturates",
        accuracy=0.78,
        params=(
            ModelParam("growthRate", "Growth Rate", 0.05, 0.01, 0.2, 0.01,
                       "Growth rate per period"),
            ModelParam("saturation", "Saturation Level", 0.8, 0.5, 1.0, 0.05,
                       "Market saturation factor"),
        ),
    ),
    "seasonal": ForecastModel(
        id="seasonal",
        name="Seasonal Adjusted",
        description="Applies recurring Q1 and Q4 adjustments to the trend",
        accuracy=0.91,
        params=(
            ModelParam("q1Factor", "Q1 Adjustment", 0.85, 0.7, 1.0, 0.05,
                       "Q1 seasonal adjustment factor"),
            ModelParam("q4Factor", "Q4 Adjustment", 1.3, 1.0, 1.5, 0.05,
                       "Q4 seasonal adjustment factor"),
        ),
    ),
}


def get_model(model_id: str) -> ForecastModel:
    try:
        return MODELS[model_id]
    except KeyError:
        raise InvalidArgument(
            f"Unknown forecast model '{model_id}', expected one of {sorted(MODELS)}"
        ) from None


@dataclass(frozen=True)
class Historical:
    """An observed point. It carries no uncertainty band."""

    date: date
    value: float

    actual = True
    model_id = None

    @property
    def lower(self) -> float:
        return self.value

    @property
    def upper(self) -> float:
        return self.value


@dataclass(frozen=True)
class Projected:
    date: date
    value: float
    lower: float
    upper: float
    model_id: str

    actual = False

    def __post_init__(self) -> None:
        if not self.lower <= self.value <= self.upper:
            raise InvalidArgument(
                f"Band [{self.lower}, {self.upper}] does not contain {self.value}"
            )

    @property
    def transactions(self) -> int:
        return round(self.value / AVERAGE_ORDER_VALUE)


type ForecastPoint = Historical | Projected


FORECAST_SCHEMA = DataFrameSchema(
    columns={
        "date": Column("datetime64[ns]", coerce=True),
        "value": Column(float, coerce=True),
        "lower": Column(float, coerce=True),
        "upper": Column(float, coerce=True),
        "model_id": Column(str, Check.isin(list(MODELS)), nullable=True),
        "actual": Column(bool),
    },
    checks=[
        Check(lambda df: (df["lower"] <= df["value"]) & (df["value"] <= df["upper"]),
              name="band_contains_value"),
        Check(lambda df: df.loc[df["actual"], "lower"].eq(df.loc[df["actual"], "upper"]).all(),
              name="actuals_have_no_band"),
    ],
    strict=False,
)
