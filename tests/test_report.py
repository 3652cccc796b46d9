from datetime import date

import pytest

from salescast.domains.forecast.models import Projected, get_model
from salescast.domains.forecast.project import combine, project
from salescast.domains.forecast.report import (
    build_forecast_table,
    build_scenario_table,
    historical_growth,
    summarize_forecast,
    summarize_scenarios,
)
from salescast.domains.sales.models import DatedValue
from salescast.utils.calendar import date_series


def _flat_forecast(value, periods, start=date(2025, 1, 1)):
    return [
        Projected(date=d, value=value, lower=value * 0.9, upper=value * 1.1, model_id="linear")
        for d in date_series(start, periods, "month")
    ]


def test_summary_metrics(flat_history):
    summary = summarize_forecast(flat_history, _flat_forecast(1100.0, 12), get_model("linear"))
    assert summary.total_revenue == pytest.approx(13_200)
    assert summary.average_revenue == pytest.approx(1100)
    assert summary.annual_growth_pct == pytest.approx((1.1 ** (1 / 12) - 1) * 12 * 100)
    assert summary.confidence_pct == pytest.approx(0.85 * (1 - 12 / 36) * 100)
    assert summary.historical_growth_pct == pytest.approx(0)


def test_confidence_never_negative(flat_history):
    summary = summarize_forecast(flat_history, _flat_forecast(1000.0, 40), get_model("seasonal"))
    assert summary.confidence_pct == 0


def test_empty_forecast_summary_is_zero(flat_history):
    summary = summarize_forecast(flat_history, [], get_model("linear"))
    assert (summary.total_revenue, summary.average_revenue,
            summary.annual_growth_pct, summary.confidence_pct) == (0, 0, 0, 0)


def test_growth_is_zero_for_non_positive_values(flat_history):
    forecast = [Projected(date=date(2025, 1, 1), value=-10.0, lower=-11.0, upper=-9.0,
                          model_id="linear")]
    assert summarize_forecast(flat_history, forecast, get_model("linear")).annual_growth_pct == 0


def test_historical_growth():
    history = [DatedValue(d, v) for d, v in zip(date_series(date(2024, 1, 1), 2, "month"), [100, 121])]
    assert historical_growth(history) == pytest.approx(0.1)
    assert historical_growth([]) == 0


def test_forecast_table_has_a_row_per_point(monthly_history):
    points = combine(monthly_history, project(monthly_history, "linear", 6))
    table = build_forecast_table(points)
    assert table.row_count == 30


def test_summary_reports_historical_growth():
    dates = date_series(date(2024, 1, 1), 4, "month")
    history = [DatedValue(d, v) for d, v in zip(dates, [1000.0, 1100.0, 1200.0, 1600.0])]
    summary = summarize_forecast(history, _flat_forecast(1600.0, 6), get_model("linear"))
    assert summary.historical_growth_pct == pytest.approx((1.6 ** (1 / 4) - 1) * 12 * 100)


def test_scenarios_scale_the_summary(flat_history):
    summary = summarize_forecast(flat_history, _flat_forecast(1100.0, 12), get_model("linear"))
    forecast = _flat_forecast(1100.0, 3)
    peak = Projected(date=date(2025, 4, 1), value=2000.0, lower=1800.0, upper=2200.0, model_id="linear")
    scenarios = summarize_scenarios(summary, {"Base Case": forecast + [peak], "Optimistic": forecast})

    assert [s.name for s in scenarios] == ["Pessimistic", "Base Case", "Optimistic"]
    assert [s.risk for s in scenarios] == ["Low", "Medium", "High"]
    assert [s.total_revenue for s in scenarios] == pytest.approx([11_880, 13_200, 14_520])
    assert [s.average_revenue for s in scenarios] == pytest.approx([990, 1100, 1210])
    assert scenarios[2].annual_growth_pct == pytest.approx(summary.annual_growth_pct * 1.1)
    assert [s.peak_date for s in scenarios] == [None, date(2025, 4, 1), date(2025, 1, 1)]


def test_scenario_table_has_a_row_per_scenario(flat_history):
    summary = summarize_forecast(flat_history, _flat_forecast(1000.0, 6), get_model("linear"))
    table = build_scenario_table(summarize_scenarios(summary, {}))
    assert table.row_count == 3
    assert [c.header for c in table.columns][-1] == "Risk"
