"""
Exponential smoothing kernels shared by every statistic.

    smooth(a, b, γ) = a + γ (b - a)

In-place variants write into the first argument so per-observation updates
do not allocate.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray


def smooth(a: float, b: float, gamma: float) -> float:
    """Scalar smoothing: a + γ (b - a)."""
    return a + gamma * (b - a)


def smooth_(a: NDArray[np.floating[Any]], b: NDArray[np.floating[Any]], gamma: float) -> None:
    """In-place array smoothing: a ← a + γ (b - a)."""
    a += gamma * (b - a)


def smooth_outer_(A: NDArray[np.floating[Any]], x: NDArray[np.floating[Any]], gamma: float) -> None:
    """In-place smoothing of a second-moment matrix: A ← A + γ (x xᵗ - A)."""
    A *= 1.0 - gamma
    A += gamma * np.outer(x, x)


def unbias(n: int) -> float:
    """Bessel factor n / (n - 1); 1 when fewer than two observations."""
    if n < 2:
        return 1.0
    return n / (n - 1)
