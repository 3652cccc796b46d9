"""Forecast summary metrics and console tables."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from rich.console import Console
from rich.table import Table

from salescast.domains.forecast.models import ForecastModel, ForecastPoint, Projected
from salescast.domains.forecast.project import SCENARIO_GROWTH

console = Console()

# Confidence falls to zero once a forecast reaches this many periods.
CONFIDENCE_HORIZON = 36
PERIODS_PER_YEAR = 12


@dataclass(frozen=True)
class ForecastSummary:
    total_revenue: float
    average_revenue: float
    annual_growth_pct: float
    confidence_pct: float
    historical_growth_pct: float


def _periodic_growth(start: float, end: float, periods: int) -> float:
    match (start, end, periods):
        case (s, e, n) if s > 0 and e > 0 and n > 0:
            return (e / s) ** (1 / n) - 1
        case _:
            return 0.0


def historical_growth(history: Sequence[Any]) -> float:
    """Per-period compound growth from the first to the last historical value."""
    if len(history) == 0:
        return 0.0
    return _periodic_growth(history[0].value, history[-1].value, len(history))


def summarize_forecast(
    history: Sequence[Any],
    forecast: Sequence[Projected],
    model: ForecastModel,
) -> ForecastSummary:
    """Headline numbers for a forecast.

    Forecast growth compares the last forecast value with the last actual,
    historical growth compares the last actual with the first. Both are
    annualized assuming monthly periods. Confidence decays linearly with the
    forecast length and never goes below zero.
    """
    if not forecast or not history:
        return ForecastSummary(0.0, 0.0, 0.0, 0.0, 0.0)

    total = sum(point.value for point in forecast)
    growth = _periodic_growth(history[-1].value, forecast[-1].value, len(forecast))
    confidence = max(model.accuracy * (1 - len(forecast) / CONFIDENCE_HORIZON), 0.0)

    return ForecastSummary(
        total_revenue=total,
        average_revenue=total / len(forecast),
        annual_growth_pct=growth * PERIODS_PER_YEAR * 100,
        confidence_pct=confidence * 100,
        historical_growth_pct=historical_growth(history) * PERIODS_PER_YEAR * 100,
    )


def build_forecast_table(points: Sequence[ForecastPoint], title: str = "Forecast") -> Table:
    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Revenue", justify="right")
    table.add_column("Lower", justify="right")
    table.add_column("Upper", justify="right")
    table.add_column("Source")

    for point in points:
        source = "[green]actual[/green]" if point.actual else f"[yellow]{point.model_id}[/yellow]"
        table.add_row(
            point.date.isoformat(),
            f"{point.value:,.0f}",
            f"{point.lower:,.0f}",
            f"{point.upper:,.0f}",
            source,
        )
    return table


def print_summary(summary: ForecastSummary, model: ForecastModel) -> None:
    console.print(f"  [bold]{model.name}[/bold] ({model.accuracy:.0%} accuracy)")
    console.print(f"    Projected revenue: {summary.total_revenue:,.0f}")
    console.print(f"    Average per period: {summary.average_revenue:,.0f}")
    color = "green" if summary.annual_growth_pct > 0 else "red"
    console.print(f"    Annual growth: [{color}]{summary.annual_growth_pct:+.1f}%[/{color}]")
    console.print(f"    Historical growth: {summary.historical_growth_pct:+.1f}%")
    console.print(f"    Confidence: {summary.confidence_pct:.0f}%")


SCENARIO_RISK = {"Pessimistic": "Low", "Base Case": "Medium", "Optimistic": "High"}


@dataclass(frozen=True)
class Scenario:
    name: str
    total_revenue: float
    annual_growth_pct: float
    average_revenue: float
    peak_date: date | None
    risk: str


def summarize_scenarios(
    summary: ForecastSummary,
    forecasts: Mapping[str, Sequence[Projected]],
) -> list[Scenario]:
    """Scale the headline numbers by each scenario's growth factor.

    ``forecasts`` maps scenario names to their projections and supplies each
    scenario's peak period.
    """
    scenarios = []
    for name, scale in SCENARIO_GROWTH.items():
        forecast = forecasts.get(name, [])
        peak = max(forecast, key=lambda point: point.value).date if forecast else None
        scenarios.append(Scenario(
            name=name,
            total_revenue=summary.total_revenue * scale,
            annual_growth_pct=summary.annual_growth_pct * scale,
            average_revenue=summary.average_revenue * scale,
            peak_date=peak,
            risk=SCENARIO_RISK[name],
        ))
    return scenarios


def build_scenario_table(scenarios: Sequence[Scenario]) -> Table:
    table = Table(title="Scenarios")
    table.add_column("Scenario", style="cyan")
    table.add_column("Revenue", justify="right")
    table.add_column("Growth", justify="right")
    table.add_column("Avg / period", justify="right")
    table.add_column("Peak")
    table.add_column("Risk")

    for s in scenarios:
        table.add_row(
            s.name,
            f"{s.total_revenue:,.0f}",
            f"{s.annual_growth_pct:+.1f}%",
            f"{s.average_revenue:,.0f}",
            s.peak_date.isoformat() if s.peak_date else "-",
            s.risk,
        )
    return table
