"""
Central tendency and spread: Mean, Variance, Moments, CovMatrix.

Every accumulator here is a smoothed average of some function of the
observations, so with EqualWeight the values are exact sample statistics
and an "append" merge of two partitions reproduces the single-pass result.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystreamstats.core.dimensions import VECTOR
from pystreamstats.core.validation import check_array, check_integer_range, check_length
from pystreamstats.stats._base import OnlineStat
from pystreamstats.stats._smoothing import smooth, smooth_, smooth_outer_, unbias


class Mean(OnlineStat):
    """
    Univariate mean.

    μ ← μ + γ (y - μ)
    """

    def __init__(self):
        self.mu = 0.0

    def update(self, y: float, gamma: float) -> None:
        self.mu = smooth(self.mu, float(y), gamma)

    def value(self) -> float:
        return self.mu

    def mean(self) -> float:
        return self.mu

    def merge(self, other: Mean, gamma: float) -> None:
        self.check_mergeable(other)
        self.update(other.value(), gamma)


class Variance(OnlineStat):
    """
    Univariate variance (Welford-style streaming update).

    Keeps the biased second central moment σ² and the mean μ:

        μ_old = μ
        μ ← μ + γ (y - μ)
        σ² ← σ² + γ ((y - μ)(y - μ_old) - σ²)

    ``value()`` applies the Bessel factor n / (n - 1).
    """

    def __init__(self):
        self.sigma2 = 0.0
        self.mu = 0.0
        self.nobs = 0

    def update(self, y: float, gamma: float) -> None:
        y = float(y)
        mu_old = self.mu
        self.nobs += 1
        self.mu = smooth(self.mu, y, gamma)
        self.sigma2 = smooth(self.sigma2, (y - self.mu) * (y - mu_old), gamma)

    def value(self) -> float:
        return self.sigma2 * unbias(self.nobs)

    def mean(self) -> float:
        return self.mu

    def var(self) -> float:
        return self.value()

    def std(self) -> float:
        return float(np.sqrt(self.value()))

    def merge(self, other: Variance, gamma: float) -> None:
        """
        Combine two biased second moments (law of total variance).

        Smoothing the two σ² alone misses the between-group term, so
        δ² γ (1 - γ) is added, δ being the difference of the means.
        """
        self.check_mergeable(other)
        delta = other.mu - self.mu
        self.nobs += other.nobs
        self.sigma2 = smooth(self.sigma2, other.sigma2, gamma) + delta ** 2 * gamma * (1.0 - gamma)
        self.mu = smooth(self.mu, other.mu, gamma)


class Moments(OnlineStat):
    """
    First four non-central moments E[y], E[y²], E[y³], E[y⁴].

    Skewness and excess kurtosis are derived in closed form from the four
    moments and the bias-corrected variance.
    """

    def __init__(self):
        self.m = np.zeros(4)
        self.nobs = 0

    def update(self, y: float, gamma: float) -> None:
        y = float(y)
        self.nobs += 1
        smooth_(self.m, np.array([y, y * y, y * y * y, y * y * y * y]), gamma)

    def value(self) -> NDArray[np.floating[Any]]:
        return self.m.copy()

    def mean(self) -> float:
        return float(self.m[0])

    def var(self) -> float:
        return float((self.m[1] - self.m[0] ** 2) * unbias(self.nobs))

    def std(self) -> float:
        return float(np.sqrt(self.var()))

    def skewness(self) -> float:
        m1, m2, m3, _ = self.m
        v = self.var()
        return float((m3 - 3.0 * m1 * v - m1 ** 3) / v ** 1.5)

    def kurtosis(self) -> float:
        """Excess kurtosis (0 for a normal distribution)."""
        m1, m2, m3, m4 = self.m
        v = self.var()
        return float(
            (m4 - 4.0 * m1 * m3 + 6.0 * m1 ** 2 * m2 - 3.0 * m1 ** 4) / v ** 2 - 3.0
        )

    def merge(self, other: Moments, gamma: float) -> None:
        self.check_mergeable(other)
        smooth_(self.m, other.m, gamma)
        self.nobs += other.nobs


class CovMatrix(OnlineStat):
    """
    Covariance matrix of ``p`` variables.

    Maintains the column means b = mean(x) and the second-moment matrix
    A = mean(x xᵗ); the covariance is unbias(n) (A - b bᵗ).

    Args:
        p: Number of variables, p >= 1
    """

    input_dim = VECTOR

    def __init__(self, p: int):
        p = check_integer_range(p, 'p', 1)
        self.A = np.zeros((p, p))
        self.b = np.zeros(p)
        self.nobs = 0

    @property
    def n_features(self) -> int:
        return len(self.b)

    def _merge_conflict(self, other: CovMatrix) -> str | None:
        if other.n_features != self.n_features:
            return f"track different dimensions ({self.n_features} vs {other.n_features})"
        return None

    def update(self, x: ArrayLike, gamma: float) -> None:
        x = check_array(x, 'x')
        check_length(x, self.n_features, 'x')
        smooth_(self.b, x, gamma)
        smooth_outer_(self.A, x, gamma)
        self.nobs += 1

    def value(self) -> NDArray[np.floating[Any]]:
        c = self.A - np.outer(self.b, self.b)
        c = 0.5 * (c + c.T)
        return c * unbias(self.nobs)

    def cov(self) -> NDArray[np.floating[Any]]:
        return self.value()

    def cor(self) -> NDArray[np.floating[Any]]:
        c = self.value()
        v = 1.0 / np.sqrt(np.diag(c))
        return c * v[:, np.newaxis] * v[np.newaxis, :]

    def mean(self) -> NDArray[np.floating[Any]]:
        return self.b.copy()

    def var(self) -> NDArray[np.floating[Any]]:
        return np.diag(self.value()).copy()

    def std(self) -> NDArray[np.floating[Any]]:
        return np.sqrt(self.var())

    def merge(self, other: CovMatrix, gamma: float) -> None:
        self.check_mergeable(other)
        smooth_(self.A, other.A, gamma)
        smooth_(self.b, other.b, gamma)
        self.nobs += other.nobs
