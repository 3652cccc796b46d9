"""Export forecasts and sales series to disk."""

from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from rich.console import Console

from salescast.domains.forecast.models import FORECAST_SCHEMA, ForecastPoint
from salescast.domains.sales.generate import SalesSeries, to_frame
from salescast.domains.sales.models import SALES_SCHEMA
from salescast.utils.io import write_output
from salescast.utils.validators import validate_dataframe

type ExportResult = dict[str, Path]

console = Console()

FORECAST_COLUMNS = ["date", "value", "lower", "upper", "model_id", "actual"]


def forecast_to_frame(points: Sequence[ForecastPoint]) -> pd.DataFrame:
    """Flatten historical and projected points into one frame."""
    df = pd.DataFrame(
        [
            {
                "date": point.date,
                "value": float(point.value),
                "lower": float(point.lower),
                "upper": float(point.upper),
                "model_id": point.model_id,
                "actual": point.actual,
            }
            for point in points
        ],
        columns=FORECAST_COLUMNS,
    )
    df["date"] = pd.to_datetime(df["date"])
    df["actual"] = df["actual"].astype(bool)
    return df


def write_forecast_output(
    series: SalesSeries,
    points: Sequence[ForecastPoint],
    output_dir: Path,
    fmt: str = "csv",
) -> ExportResult:
    """Validate and write the sales history and the combined forecast."""
    sales_df = to_frame(series)
    forecast_df = forecast_to_frame(points)

    for name, df, schema in (
        ("sales", sales_df, SALES_SCHEMA),
        ("forecast", forecast_df, FORECAST_SCHEMA),
    ):
        match validate_dataframe(df, schema):
            case {"valid": False, "errors": errs}:
                raise ValueError(f"{name} output failed validation: {'; '.join(errs[:3])}")
            case _:
                pass

    console.print(f"  Writing outputs to {output_dir}")
    result = {
        "sales": write_output(sales_df, output_dir / "sales", fmt),
        "forecast": write_output(forecast_df, output_dir / "forecast", fmt),
    }
    console.print(f"  Export complete ({fmt} format)")
    return result
