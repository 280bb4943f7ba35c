"""
Histogram adapter.

OHistogram only computes the bucket index of each observation; counting
and merging are delegated to a fixed-edge histogram collaborator
(FixedEdgeHistogram by default, or anything satisfying
pystreamstats.core.protocols.Histogram).
"""

from __future__ import annotations

import math
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystreamstats.core.exceptions import IncompatibleMergeError, ValidationError
from pystreamstats.core.validation import check_1d, check_array, check_finite
from pystreamstats.stats._base import OnlineStat


class FixedEdgeHistogram:
    """
    Counts over evenly spaced, left-closed bins [e_i, e_{i+1}).

    Args:
        edges: Increasing, evenly spaced bin edges (at least two)
    """

    def __init__(self, edges: ArrayLike):
        edges = check_array(edges, 'edges')
        check_1d(edges, 'edges')
        check_finite(edges, 'edges')
        if len(edges) < 2:
            raise ValidationError(f"edges: need at least 2 edges, got {len(edges)}")
        steps = np.diff(edges)
        if np.any(steps <= 0):
            raise ValidationError("edges: must be strictly increasing")
        if not np.allclose(steps, steps[0], rtol=1e-9, atol=0.0):
            raise ValidationError("edges: must be evenly spaced")
        self.edges = edges.astype(np.float64)
        self.counts = np.zeros(len(edges) - 1, dtype=np.int64)

    @property
    def nbins(self) -> int:
        return len(self.counts)

    @property
    def start(self) -> float:
        return float(self.edges[0])

    @property
    def step(self) -> float:
        return float(self.edges[1] - self.edges[0])

    def increment(self, index: int) -> None:
        self.counts[index] += 1

    def merge(self, other: FixedEdgeHistogram) -> None:
        if other.edges.shape != self.edges.shape or not np.array_equal(other.edges, self.edges):
            raise IncompatibleMergeError(
                "Merge failed. Histograms have different edges.",
                left=type(self).__name__, right=type(other).__name__,
                reason='different edges',
            )
        self.counts += other.counts


class OHistogram(OnlineStat):
    """
    Online histogram with fixed, evenly spaced, left-closed bins.

    Observations outside [edges[0], edges[-1]) are dropped silently, as
    are NaN and infinite values.

    Args:
        edges: Bin edges, or a ready-made histogram collaborator

    Example:
        >>> o = OHistogram(np.linspace(-4, 4, 81))
    """

    def __init__(self, edges: ArrayLike | FixedEdgeHistogram):
        if isinstance(edges, FixedEdgeHistogram):
            self.h = edges
        else:
            self.h = FixedEdgeHistogram(edges)

    def _merge_conflict(self, other: OHistogram) -> str | None:
        if other.h.edges.shape != self.h.edges.shape or not np.array_equal(other.h.edges, self.h.edges):
            return "have different edges"
        return None

    def bucket(self, y: float) -> int:
        """0-based index of the bin containing y (may be out of range)."""
        return math.floor((float(y) - self.h.start) / self.h.step)

    def update(self, y: float, gamma: float = 1.0) -> None:
        if not math.isfinite(y):
            return
        k = self.bucket(y)
        if 0 <= k < self.h.nbins:
            self.h.increment(k)

    def value(self) -> tuple[NDArray[np.floating[Any]], NDArray[np.integer[Any]]]:
        return self.h.edges.copy(), self.h.counts.copy()

    def merge(self, other: OHistogram, gamma: float) -> None:
        self.check_mergeable(other)
        self.h.merge(other.h)

    def __repr__(self) -> str:
        return f"OHistogram({self.h.nbins} bins on [{self.h.edges[0]}, {self.h.edges[-1]}))"
