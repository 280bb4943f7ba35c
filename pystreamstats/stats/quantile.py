"""
Online quantile estimators.

Three stochastic approximations to the minimizer of the weighted pinball
(check) loss, one estimate per tracked level τ:

    QuantileMM    online Majorize-Minimize (OMAS)
    QuantileMSPI  Majorized Stochastic Proximal Iteration
    QuantileSGD   stochastic subgradient descent

All three start every estimate at the first observation (the update that
arrives with γ = 1) and prefer a LearningRate schedule.

References:
    Hunter, D.R. and Lange, K. (2000) "Quantile Regression via an MM
    Algorithm", Journal of Computational and Graphical Statistics, 9(1).
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystreamstats.core.validation import check_probabilities
from pystreamstats.stats._base import OnlineStat
from pystreamstats.stats._smoothing import smooth_
from pystreamstats.weights import LearningRate

# Guards 1 / |y - q| when an observation lands on the current estimate
EPSILON = 1e-8

DEFAULT_LEVELS = (0.25, 0.5, 0.75)


class _QuantileEstimator(OnlineStat):
    """Shared state and merge for the quantile estimators."""

    default_weight = LearningRate

    def __init__(self, tau: ArrayLike = DEFAULT_LEVELS):
        self.tau = check_probabilities(tau, 'tau')
        self._value = np.zeros(len(self.tau))

    def _merge_conflict(self, other: _QuantileEstimator) -> str | None:
        if not np.array_equal(self.tau, other.tau):
            return "track different quantiles"
        return None

    def value(self) -> NDArray[np.floating[Any]]:
        return self._value.copy()

    def merge(self, other: _QuantileEstimator, gamma: float) -> None:
        self.check_mergeable(other)
        smooth_(self._value, other._value, gamma)


class QuantileMM(_QuantileEstimator):
    """
    Approximate quantiles via an online MM algorithm (OMAS).

    Per level j, with w = 1 / (|y - q_j| + ε):

        s_j ← s_j + γ (w y - s_j)
        t_j ← t_j + γ (w - t_j)
        q_j = (s_j + 2 τ_j - 1) / t_j

    Args:
        tau: Quantile levels in (0, 1)
    """

    def __init__(self, tau: ArrayLike = DEFAULT_LEVELS):
        super().__init__(tau)
        self.s = np.zeros(len(self.tau))
        self.t = np.zeros(len(self.tau))

    def update(self, y: float, gamma: float) -> None:
        y = float(y)
        if gamma == 1.0:
            self._value.fill(y)
        w = 1.0 / (np.abs(y - self._value) + EPSILON)
        smooth_(self.s, w * y, gamma)
        smooth_(self.t, w, gamma)
        self._value = (self.s + (2.0 * self.tau - 1.0)) / self.t


class QuantileMSPI(_QuantileEstimator):
    """
    Approximate quantiles via Majorized Stochastic Proximal Iteration.

    Per level j, with w = 1 / (|y - q_j| + ε) and b = τ_j - ½ (1 - y w):

        q_j ← (q_j + γ b) / (1 + ½ γ w)

    Args:
        tau: Quantile levels in (0, 1)
    """

    def update(self, y: float, gamma: float) -> None:
        y = float(y)
        if gamma == 1.0:
            self._value.fill(y)
        w = 1.0 / (np.abs(y - self._value) + EPSILON)
        b = self.tau - 0.5 * (1.0 - y * w)
        self._value = (self._value + gamma * b) / (1.0 + 0.5 * gamma * w)


class QuantileSGD(_QuantileEstimator):
    """
    Approximate quantiles via stochastic subgradient descent.

        q_j ← q_j - γ (1[q_j > y] - τ_j)

    Args:
        tau: Quantile levels in (0, 1)
    """

    def update(self, y: float, gamma: float) -> None:
        y = float(y)
        if gamma == 1.0:
            self._value.fill(y)
        self._value -= gamma * ((self._value > y).astype(np.float64) - self.tau)
