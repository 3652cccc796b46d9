"""Sales record types and the pandera schema that guards generated series."""

from dataclasses import dataclass
from datetime import date

from pandera import Check, Column, DataFrameSchema


@dataclass(frozen=True)
class DatedValue:
    date: date
    value: float


@dataclass(frozen=True)
class SalesDataPoint:
    date: date
    revenue: int
    profit: int
    costs: int
    transactions: int
    marketing_spend: int

    @property
    def value(self) -> int:
        """Revenue is the primary series value for regression and forecasting."""
        return self.revenue


SALES_SCHEMA = DataFrameSchema(
    columns={
        "date": Column("datetime64[ns]", unique=True),
        "revenue": Column(int, Check.greater_than_or_equal_to(0)),
        "costs": Column(int, Check.greater_than_or_equal_to(0)),
        # profit may dip below zero on weak days
        "profit": Column(int),
        "transactions": Column(int, Check.greater_than_or_equal_to(0)),
        "marketing_spend": Column(int, Check.greater_than_or_equal_to(0)),
    },
    checks=[
        Check(lambda df: df["profit"] == df["revenue"] - df["costs"],
              name="profit_equals_revenue_minus_costs"),
        Check(lambda df: df["date"].is_monotonic_increasing,
              name="dates_increasing"),
    ],
    strict=False,
    coerce=True,
)
