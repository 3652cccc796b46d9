"""Sales domain: synthetic revenue, cost and transaction history."""

from datetime import date

from rich.console import Console
from rich.table import Table

from salescast.config import SalescastConfig
from salescast.domains.sales.generate import generate_series, to_frame
from salescast.domains.sales.kpi import generate_kpi_metrics
from salescast.domains.sales.models import SALES_SCHEMA
from salescast.utils.io import write_output
from salescast.utils.random import RandomSource
from salescast.utils.types import Interval
from salescast.utils.validators import validate_dataframe, validate_monotonic_dates

console = Console()


def validate() -> dict:
    """Generate a small seeded series and check it against the sales schema."""
    try:
        series = generate_series(date(2024, 1, 1), 90, Interval.DAY, rng=RandomSource(seed=0))
        df = to_frame(series)

        match validate_dataframe(df, SALES_SCHEMA), validate_monotonic_dates(df):
            case {"valid": True}, {"valid": True}:
                return {"status": "ok", "row_count": len(df)}
            case {"errors": schema_errs}, {"errors": date_errs}:
                return {"status": "error", "message": "; ".join((schema_errs + date_errs)[:3])}
    except ValueError as exc:
        return {"status": "error", "message": str(exc)}


def run(config: SalescastConfig) -> None:
    gen = config.generator
    rng = RandomSource(seed=gen.seed)
    series = generate_series(gen.start, gen.periods, gen.interval, rng=rng)
    df = to_frame(series)
    console.print(
        f"  Generated {len(df):,} {gen.interval} points from {gen.start.isoformat()}"
    )

    table = Table(title="Sales totals")
    table.add_column("Metric", style="cyan")
    table.add_column("Total", justify="right")
    for column in ("revenue", "costs", "profit", "transactions", "marketing_spend"):
        table.add_row(column, f"{df[column].sum():,}")
    console.print(table)

    kpis = Table(title="KPIs")
    kpis.add_column("KPI", style="cyan")
    kpis.add_column("Value", justify="right")
    kpis.add_column("Change", justify="right")
    for metric in generate_kpi_metrics(rng):
        color = "green" if metric.color == "success" else "red"
        kpis.add_row(metric.name, f"{metric.value:,}",
                     f"[{color}]{metric.change_percent:+.1f}%[/{color}]")
    console.print(kpis)

    if config.export.enabled:
        write_output(df, config.export.output_dir / "sales", config.export.fmt)
