"""
Shared fixtures for salescast tests.
"""
from datetime import date

import pytest

from salescast.domains.sales.generate import generate_series
from salescast.domains.sales.models import DatedValue
from salescast.utils.calendar import date_series
from salescast.utils.random import RandomSource


@pytest.fixture
def rng():
    return RandomSource(seed=1234)


@pytest.fixture
def monthly_history(rng):
    """24 months of generated sales starting 2024-01-01."""
    return generate_series(date(2024, 1, 1), 24, "month", rng=rng)


@pytest.fixture
def flat_history():
    """12 monthly points of constant value 1000, ending 2024-12-01."""
    return [DatedValue(d, 1000.0) for d in date_series(date(2024, 1, 1), 12, "month")]
