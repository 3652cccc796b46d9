import pandas as pd
import pytest

from salescast.domains.forecast.export import forecast_to_frame, write_forecast_output
from salescast.domains.forecast.models import FORECAST_SCHEMA
from salescast.domains.forecast.project import combine, project
from salescast.domains.sales.generate import to_frame
from salescast.utils.io import write_output
from salescast.utils.validators import validate_dataframe


def test_forecast_frame(monthly_history):
    points = combine(monthly_history, project(monthly_history, "seasonal", 6))
    df = forecast_to_frame(points)
    assert list(df.columns) == ["date", "value", "lower", "upper", "model_id", "actual"]
    assert df["actual"].sum() == 24
    assert df["model_id"].dropna().unique().tolist() == ["seasonal"]
    assert validate_dataframe(df, FORECAST_SCHEMA)["valid"]


def test_write_forecast_output_csv(monthly_history, tmp_path):
    points = combine(monthly_history, project(monthly_history, "linear", 12))
    paths = write_forecast_output(monthly_history, points, tmp_path / "run")

    assert paths["sales"] == tmp_path / "run" / "sales.csv"
    sales = pd.read_csv(paths["sales"])
    assert len(sales) == 24
    assert (sales["profit"] == sales["revenue"] - sales["costs"]).all()

    forecast = pd.read_csv(paths["forecast"])
    assert len(forecast) == 36
    assert forecast["date"].iloc[24] == "2026-01-01"


def test_write_forecast_output_json(monthly_history, tmp_path):
    points = combine(monthly_history, project(monthly_history, "exponential", 3))
    paths = write_forecast_output(monthly_history, points, tmp_path, fmt="json")
    assert paths["forecast"].suffix == ".json"
    assert len(pd.read_json(paths["forecast"])) == 27


def test_unsupported_format(monthly_history, tmp_path):
    with pytest.raises(ValueError):
        write_output(to_frame(monthly_history), tmp_path / "sales", fmt="xml")
