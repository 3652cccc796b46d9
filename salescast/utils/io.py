"""File I/O for exporting generated series and forecasts."""

import tomllib
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console()

SUPPORTED_FORMATS = ("csv", "json")


def records_to_frame(records: list[Any], columns: list[str] | None = None) -> pd.DataFrame:
    """Flatten a list of dataclass records into a DataFrame.

    Properties are not included; callers that need derived columns add them.
    """
    rows = []
    for record in records:
        match record:
            case dict():
                rows.append(record)
            case _ if is_dataclass(record):
                rows.append(asdict(record))
            case other:
                raise TypeError(f"Cannot convert {type(other).__name__} to a row")

    df = pd.DataFrame(rows, columns=columns)
    if "date" in df.columns:
        df["date"] = pd.to_datetime(df["date"])
    return df


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> Path:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            path = path.with_suffix(".csv")
            df.to_csv(path, index=False, date_format="%Y-%m-%d")
        case "json":
            path = path.with_suffix(".json")
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
    return path


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML file with the stdlib parser."""
    with open(path, "rb") as f:
        return tomllib.load(f)
