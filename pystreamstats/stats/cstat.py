"""Complex-valued observations through two real accumulators."""

from __future__ import annotations

import copy
from typing import Any

from pystreamstats.core.dimensions import COMPLEX, SCALAR
from pystreamstats.core.exceptions import ValidationError
from pystreamstats.stats._base import OnlineStat


class CStat(OnlineStat):
    """
    Track a scalar statistic for complex numbers.

    A deep copy of ``stat`` is made so the real and imaginary parts are
    tracked independently. ``value()`` is the pair of their values.

    Args:
        stat: Any scalar statistic (it becomes the real-part tracker)

    Example:
        >>> s = Series(CStat(Mean()))
        >>> s.update([1 + 2j, 3 - 1j])
    """

    input_domain = COMPLEX

    def __init__(self, stat: Any):
        if getattr(stat, 'input_dim', None) != SCALAR:
            raise ValidationError(
                f"stat: CStat requires a scalar statistic, got {type(stat).__name__}"
            )
        self.re_stat = stat
        self.im_stat = copy.deepcopy(stat)

    @property
    def default_weight(self):
        return self.re_stat.default_weight

    def _merge_conflict(self, other: CStat) -> str | None:
        if type(other.re_stat) is not type(self.re_stat):
            return f"wrap different statistics ({type(self.re_stat).__name__} vs {type(other.re_stat).__name__})"
        self.re_stat.check_mergeable(other.re_stat)
        self.im_stat.check_mergeable(other.im_stat)
        return None

    def update(self, y: complex, gamma: float) -> None:
        y = complex(y)
        self.re_stat.update(y.real, gamma)
        self.im_stat.update(y.imag, gamma)

    def value(self) -> tuple[Any, Any]:
        return self.re_stat.value(), self.im_stat.value()

    def merge(self, other: CStat, gamma: float) -> None:
        self.check_mergeable(other)
        self.re_stat.merge(other.re_stat, gamma)
        self.im_stat.merge(other.im_stat, gamma)

    def __repr__(self) -> str:
        return f"CStat: re = {self.re_stat!r}, im = {self.im_stat!r}"
