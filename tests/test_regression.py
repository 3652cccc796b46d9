from datetime import date

import pytest

from salescast.domains.forecast.regression import RegressionResult, fit, residuals
from salescast.domains.sales.models import DatedValue
from salescast.utils.calendar import date_series


def test_empty_series_gives_zero():
    assert fit([]) == RegressionResult(slope=0.0, intercept=0.0)


def test_single_point_gives_zero():
    assert fit([DatedValue(date(2024, 1, 1), 500.0)]) == RegressionResult(slope=0.0, intercept=0.0)


def test_exact_line_is_recovered():
    dates = date_series(date(2024, 1, 1), 10, "month")
    series = [DatedValue(d, 3 * x + 7) for x, d in enumerate(dates)]
    result = fit(series)
    assert result.slope == pytest.approx(3)
    assert result.intercept == pytest.approx(7)


def test_plain_numbers_accepted():
    result = fit([10, 8, 6, 4])
    assert result.slope == pytest.approx(-2)
    assert result.intercept == pytest.approx(10)


def test_constant_series_is_flat():
    result = fit([42.0] * 6)
    assert result.slope == 0
    assert result.intercept == pytest.approx(42)


def test_sales_points_use_revenue(monthly_history):
    by_record = fit(monthly_history)
    by_value = fit([p.revenue for p in monthly_history])
    assert by_record == by_value


def test_predict():
    assert RegressionResult(slope=2.0, intercept=1.0).predict(4) == 9.0


def test_residuals_measure_distance_from_trend():
    dates = date_series(date(2024, 1, 1), 3, "month")
    series = [DatedValue(d, v) for d, v in zip(dates, [10, 14, 12])]
    result = residuals(series)
    assert [r.predicted for r in result] == pytest.approx([11, 12, 13])
    assert [r.residual for r in result] == pytest.approx([-1, 2, -1])
    assert [r.date for r in result] == dates
    assert [r.index for r in result] == [0, 1, 2]


def test_residuals_vanish_on_exact_line():
    assert all(r.residual == pytest.approx(0) for r in residuals([3 * x + 7 for x in range(10)]))


def test_residuals_of_plain_numbers_have_no_date():
    assert [r.date for r in residuals([1.0, 2.0])] == [None, None]


def test_residuals_use_supplied_fit():
    result = residuals([5.0, 5.0], RegressionResult(slope=1.0, intercept=0.0))
    assert [r.residual for r in result] == pytest.approx([5, 4])


def test_residuals_of_sales_history_sum_to_zero(monthly_history):
    assert sum(r.residual for r in residuals(monthly_history)) == pytest.approx(0, abs=1e-6)
