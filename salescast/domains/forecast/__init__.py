"""Forecast domain: regression-based revenue projections."""

from datetime import date

from rich.console import Console

from salescast.config import SalescastConfig
from salescast.domains.forecast.export import forecast_to_frame, write_forecast_output
from salescast.domains.forecast.models import FORECAST_SCHEMA, MODELS, get_model
from salescast.domains.forecast.project import combine, compare_models, project, scenario_forecasts
from salescast.domains.forecast.regression import fit, residuals
from salescast.domains.forecast.report import (
    build_forecast_table,
    build_scenario_table,
    print_summary,
    summarize_forecast,
    summarize_scenarios,
)
from salescast.domains.sales.generate import generate_series
from salescast.utils.random import RandomSource
from salescast.utils.types import Interval
from salescast.utils.validators import validate_dataframe

console = Console()


def validate() -> dict:
    """Project a seeded history with every model and validate the bands."""
    try:
        history = generate_series(date(2024, 1, 1), 24, Interval.MONTH, rng=RandomSource(seed=0))
        errors: list[str] = []
        for model_id, forecast in compare_models(history, 12).items():
            match validate_dataframe(forecast_to_frame(combine(history, forecast)), FORECAST_SCHEMA):
                case {"valid": False, "errors": errs}:
                    errors.extend(f"{model_id}: {e}" for e in errs)
                case _:
                    pass

        match errors:
            case []:
                return {"status": "ok", "models": len(MODELS)}
            case errs:
                return {"status": "error", "message": "; ".join(errs[:3])}
    except ValueError as exc:
        return {"status": "error", "message": str(exc)}


def run(config: SalescastConfig) -> None:
    gen, fc = config.generator, config.forecast
    history = generate_series(gen.start, gen.periods, gen.interval, rng=RandomSource(seed=gen.seed))
    model = get_model(fc.model_id)

    regression = fit(history)
    console.print(
        f"  Trend: slope={regression.slope:,.1f} intercept={regression.intercept:,.1f} "
        f"over {len(history)} points"
    )
    if history:
        worst = max(residuals(history, regression), key=lambda r: abs(r.residual))
        console.print(f"  Largest residual: {worst.residual:+,.0f} at {worst.date.isoformat()}")

    forecast = project(history, model.id, fc.horizon, fc.params, gen.interval)
    summary = summarize_forecast(history, forecast, model)
    print_summary(summary, model)
    console.print(build_forecast_table(forecast, title=f"{model.name} forecast"))
    scenarios = summarize_scenarios(summary, scenario_forecasts(history, fc.horizon, interval=gen.interval))
    console.print(build_scenario_table(scenarios))

    if config.export.enabled:
        write_forecast_output(
            history, combine(history, forecast), config.export.output_dir, config.export.fmt,
        )
