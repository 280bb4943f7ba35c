"""
Streaming model fitting: ridge regression (LinReg) and online k-means (KMeans).
"""

from __future__ import annotations

import warnings
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystreamstats.core.compute.linalg import add_diagonal, spd_solve
from pystreamstats.core.dimensions import VECTOR, XY
from pystreamstats.core.exceptions import NotPositiveDefiniteError, ValidationError
from pystreamstats.core.validation import (
    check_1d,
    check_array,
    check_integer_range,
    check_length,
)
from pystreamstats.stats._base import OnlineStat
from pystreamstats.stats._smoothing import smooth_, smooth_outer_
from pystreamstats.weights import LearningRate


Orientation = Literal['rows', 'cols']


class LinReg(OnlineStat):
    """
    Ridge regression of ``p`` predictors with elementwise regularization.

    Accumulates the smoothed cross-product matrix of z = [x, y] (or
    [x, 1, y] with an intercept), which holds XᵗX/n, Xᵗy/n and yᵗy/n in
    one symmetric matrix. ``value()`` solves

        (XᵗX/n + diag(lam)) β = Xᵗy/n

    when the regularized matrix is positive definite and otherwise returns
    the previous estimate.

    Args:
        p: Number of predictors, p >= 1
        lam: Ridge penalty, a scalar used for every predictor or a vector
            of length p; all entries >= 0
        intercept: Append a constant column; the intercept is never penalized

    Example:
        >>> o = LinReg(3)
        >>> s = Series(o)
        >>> s.update((X, y))
        >>> o.coef()
    """

    input_dim = XY

    def __init__(self, p: int, lam: float | ArrayLike = 0.0, intercept: bool = False):
        p = check_integer_range(p, 'p', 1)
        lam_arr = check_array(lam, 'lam')
        if lam_arr.ndim == 0:
            lam_arr = np.full(p, float(lam_arr))
        check_1d(lam_arr, 'lam')
        check_length(lam_arr, p, 'lam')
        if np.any(lam_arr < 0) or not np.all(np.isfinite(lam_arr)):
            raise ValidationError(f"lam: penalties must be finite and >= 0, got {lam_arr.tolist()}")
        self.lam = lam_arr.astype(np.float64)
        self.intercept = bool(intercept)
        d = p + 1 if self.intercept else p
        self.beta = np.zeros(d)
        self.A = np.zeros((d + 1, d + 1))
        self.nobs = 0

    @property
    def n_features(self) -> int:
        return len(self.lam)

    def _merge_conflict(self, other: LinReg) -> str | None:
        if other.intercept != self.intercept:
            return "differ in intercept handling"
        if other.lam.shape != self.lam.shape or not np.array_equal(other.lam, self.lam):
            return "have different lam factors"
        return None

    def _design_row(self, x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return np.append(x, 1.0) if self.intercept else x

    def update(self, obs: tuple[ArrayLike, float], gamma: float) -> None:
        x, y = obs
        x = check_array(x, 'x')
        check_length(x, self.n_features, 'x')
        z = np.append(self._design_row(x), float(y))
        smooth_outer_(self.A, z, gamma)
        self.nobs += 1

    def _penalty(self) -> NDArray[np.floating[Any]]:
        return np.append(self.lam, 0.0) if self.intercept else self.lam

    def value(self) -> NDArray[np.floating[Any]]:
        d = len(self.beta)
        xtx = self.A[:d, :d]
        xty = self.A[:d, d]
        try:
            self.beta = spd_solve(add_diagonal(xtx, self._penalty()), xty, matrix_name='XtX + diag(lam)')
        except NotPositiveDefiniteError:
            warnings.warn(
                "LinReg: regularized cross-product matrix is not positive definite, "
                "returning previous estimate",
                RuntimeWarning,
                stacklevel=2,
            )
        return self.beta.copy()

    def coef(self) -> NDArray[np.floating[Any]]:
        return self.value()

    def predict(self, x: ArrayLike, dim: Orientation = 'rows') -> float | NDArray[np.floating[Any]]:
        """
        Predict responses for one predictor vector or a matrix of them.

        Args:
            x: Vector of length p, or a matrix of observations
            dim: 'rows' if observations are rows of x, 'cols' if columns
        """
        beta = self.value()
        x = check_array(x, 'x')
        if x.ndim == 1:
            check_length(x, self.n_features, 'x')
            return float(self._design_row(x) @ beta)
        if dim == 'cols':
            x = x.T
        elif dim != 'rows':
            raise ValidationError(f"Unknown orientation: {dim!r}")
        if x.shape[1] != self.n_features:
            raise ValidationError(f"x: expected {self.n_features} predictors, got {x.shape[1]}")
        if self.intercept:
            x = np.column_stack([x, np.ones(x.shape[0])])
        return x @ beta

    def merge(self, other: LinReg, gamma: float) -> None:
        """Smooth the cross-product matrices and refresh the estimate."""
        self.check_mergeable(other)
        smooth_(self.A, other.A, gamma)
        self.nobs += other.nobs
        self.value()


class KMeans(OnlineStat):
    """
    Approximate k-means clustering of ``k`` clusters in ``p`` variables.

    Centers are the columns of a (p, k) matrix. Each observation moves only
    its nearest center (squared Euclidean distance) toward itself by γ.
    A decreasing schedule such as LearningRate is expected.

    Args:
        p: Number of variables, p >= 1
        k: Number of clusters, k >= 1
        seed: Seed for the standard normal initial centers
    """

    input_dim = VECTOR
    default_weight = LearningRate

    def __init__(self, p: int, k: int, seed: int | None = None):
        p = check_integer_range(p, 'p', 1)
        k = check_integer_range(k, 'k', 1)
        rng = np.random.default_rng(seed)
        self.centers = rng.standard_normal((p, k))
        self.v = np.zeros(k)

    @property
    def n_features(self) -> int:
        return self.centers.shape[0]

    def _merge_conflict(self, other: KMeans) -> str | None:
        if other.centers.shape != self.centers.shape:
            return f"have different shapes ({self.centers.shape} vs {other.centers.shape})"
        return None

    def update(self, x: ArrayLike, gamma: float) -> None:
        x = check_array(x, 'x')
        check_length(x, self.n_features, 'x')
        self.v = np.sum((x[:, np.newaxis] - self.centers) ** 2, axis=0)
        kstar = int(np.argmin(self.v))
        smooth_(self.centers[:, kstar], x, gamma)

    def value(self) -> NDArray[np.floating[Any]]:
        return self.centers.copy()

    def merge(self, other: KMeans, gamma: float) -> None:
        self.check_mergeable(other)
        smooth_(self.centers, other.centers, gamma)
