"""
Extremal and order statistics: Extrema, OrderStats, Diff, Sum.

None of these use the decay coefficient for their update; they are exact
summaries (or, for OrderStats, an equal-weight average over blocks).
"""

from __future__ import annotations

import numbers
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pystreamstats.core.exceptions import ValidationError
from pystreamstats.core.validation import check_integer_range
from pystreamstats.stats._base import OnlineStat
from pystreamstats.stats._smoothing import smooth_


def _check_dtype(dtype: type, name: str = 'dtype') -> type:
    """Accept a real numeric domain: Python int/float or a NumPy integer/float type."""
    if isinstance(dtype, type) and dtype is not bool and issubclass(dtype, (numbers.Real, np.integer, np.floating)):
        return dtype
    raise ValidationError(f"{name}: expected a real numeric type, got {dtype!r}")


def _is_integer_domain(dtype: type) -> bool:
    return issubclass(dtype, (numbers.Integral, np.integer))


def _convert(x, dtype: type):
    """Convert an observation into the accumulator's domain (integers round half-to-even)."""
    if _is_integer_domain(dtype):
        if isinstance(x, numbers.Integral):
            return dtype(x)
        return dtype(round(float(x)))
    return dtype(x)


class Extrema(OnlineStat):
    """Running minimum and maximum; initial state is (+inf, -inf)."""

    def __init__(self):
        self.min = np.inf
        self.max = -np.inf

    def update(self, y: float, gamma: float) -> None:
        y = float(y)
        self.min = min(self.min, y)
        self.max = max(self.max, y)

    def value(self) -> tuple[float, float]:
        return (self.min, self.max)

    def merge(self, other: Extrema, gamma: float) -> None:
        self.check_mergeable(other)
        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)


class OrderStats(OnlineStat):
    """
    Average order statistics over blocks of size ``b``.

    Observations are buffered; each completed block is sorted and folded
    into the running order-statistic vector with coefficient 1 / nreps.
    The decay coefficient from the Series is ignored.

    Args:
        b: Block size, b >= 1
    """

    def __init__(self, b: int):
        b = check_integer_range(b, 'b', 1)
        self._value = np.zeros(b)
        self.buffer = np.zeros(b)
        self.i = 0
        self.nreps = 0

    @property
    def b(self) -> int:
        return len(self._value)

    def _merge_conflict(self, other: OrderStats) -> str | None:
        if other.b != self.b:
            return f"track different batch sizes ({self.b} vs {other.b})"
        return None

    def update(self, y: float, gamma: float = 1.0) -> None:
        self.buffer[self.i] = float(y)
        self.i += 1
        if self.i == self.b:
            self.nreps += 1
            self.i = 0
            smooth_(self._value, np.sort(self.buffer), 1.0 / self.nreps)

    def value(self) -> NDArray[np.floating[Any]]:
        return self._value.copy()

    def merge(self, other: OrderStats, gamma: float) -> None:
        """Smooth completed-block vectors by gamma, then replay other's partial block."""
        self.check_mergeable(other)
        if other.nreps > 0:
            if self.nreps == 0:
                self._value[:] = other._value
            else:
                smooth_(self._value, other._value, gamma)
            self.nreps += other.nreps
        for y in other.buffer[:other.i].copy():
            self.update(y)


class Diff(OnlineStat):
    """
    Last value and its difference from the previous one.

    Args:
        dtype: Numeric domain; integer domains round each observation
    """

    def __init__(self, dtype: type = float):
        self.dtype = _check_dtype(dtype)
        self.diff = self.dtype(0)
        self.lastval = self.dtype(0)
        self.nobs = 0

    def _merge_conflict(self, other: Diff) -> str | None:
        if other.dtype is not self.dtype:
            return f"use different domains ({self.dtype.__name__} vs {other.dtype.__name__})"
        return None

    def update(self, x: float, gamma: float = 1.0) -> None:
        v = _convert(x, self.dtype)
        self.diff = v - self.lastval
        self.lastval = v
        self.nobs += 1

    def value(self):
        return self.diff

    def last(self):
        return self.lastval

    def merge(self, other: Diff, gamma: float) -> None:
        """Treat other's data as arriving after self's."""
        self.check_mergeable(other)
        if other.nobs == 0:
            return
        if other.nobs == 1:
            self.diff = other.lastval - self.lastval
        else:
            self.diff = other.diff
        self.lastval = other.lastval
        self.nobs += other.nobs


class Sum(OnlineStat):
    """
    Exact running total.

    Args:
        dtype: Numeric domain; integer domains round each observation and
            keep an exact integer total
    """

    def __init__(self, dtype: type = float):
        self.dtype = _check_dtype(dtype)
        self.sum = self.dtype(0)

    def _merge_conflict(self, other: Sum) -> str | None:
        if other.dtype is not self.dtype:
            return f"use different domains ({self.dtype.__name__} vs {other.dtype.__name__})"
        return None

    def update(self, x: float, gamma: float = 1.0) -> None:
        self.sum += _convert(x, self.dtype)

    def value(self):
        return self.sum

    def merge(self, other: Sum, gamma: float) -> None:
        self.check_mergeable(other)
        self.sum += other.sum
