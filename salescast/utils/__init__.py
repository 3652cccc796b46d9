"""Shared utilities for sales generation and forecasting."""

from salescast.utils.calendar import date_series, infer_interval, next_date
from salescast.utils.io import records_to_frame, write_output
from salescast.utils.random import RandomSource
from salescast.utils.types import Interval, InvalidArgument
from salescast.utils.validators import validate_dataframe
