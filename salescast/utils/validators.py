"""Data validation utilities using pandera."""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

from salescast.utils.types import ValidationOutcome


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Validate a DataFrame against a pandera schema."""
    try:
        schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val} if col is not None:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case {"check": check, "failure_case": val}:
                    errors.append(f"Frame failed check '{check}': {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}


def validate_monotonic_dates(df: pd.DataFrame, column: str = "date") -> ValidationOutcome:
    """Check that a series' dates are strictly increasing."""
    dates = df[column]
    if dates.is_monotonic_increasing and dates.is_unique:
        return {"valid": True, "status": "ok", "errors": []}
    return {
        "valid": False,
        "status": "error",
        "errors": [f"Column '{column}' is not strictly increasing"],
    }
