"""Bounded random draws used to add variability to synthetic series.

Every generator in the package takes an optional ``RandomSource``. Pass a
seeded one to get reproducible output; the default is unseeded.
"""

from collections.abc import Sequence

import numpy as np

from salescast.utils.types import InvalidArgument


class RandomSource:
    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def random_int(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value], both ends inclusive."""
        _check_bounds(min_value, max_value)
        return int(self._rng.integers(min_value, max_value, endpoint=True))

    def random_float(self, min_value: float, max_value: float, decimals: int = 2) -> float:
        """Float in [min_value, max_value] rounded to ``decimals`` places."""
        _check_bounds(min_value, max_value)
        value = float(self._rng.uniform(min_value, max_value))
        # rounding can nudge past either edge
        return min(max(round(value, decimals), min_value), max_value)

    def random_choice[T](self, items: Sequence[T]) -> T:
        if len(items) == 0:
            raise InvalidArgument("Cannot choose from an empty sequence")
        return items[int(self._rng.integers(0, len(items)))]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"


def _check_bounds(min_value: float, max_value: float) -> None:
    if min_value > max_value:
        raise InvalidArgument(f"min {min_value} is greater than max {max_value}")


def resolve(rng: RandomSource | None) -> RandomSource:
    return rng if rng is not None else RandomSource()
