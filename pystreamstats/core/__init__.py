"""
Core infrastructure for pystreamstats.

This module provides shared abstractions and utilities used by the
weights, stats and series subpackages.

Key components:
    protocols: Statistic, WeightSchedule, Histogram protocols
    dimensions: Dimension tags (SCALAR, VECTOR, XY)
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Linear algebra primitives
"""

from pystreamstats.core.protocols import Statistic, WeightSchedule, Histogram
from pystreamstats.core.dimensions import SCALAR, VECTOR, XY
from pystreamstats.core.exceptions import (
    StreamStatsError,
    ValidationError,
    DimensionError,
    IncompatibleMergeError,
    NumericalError,
    NotPositiveDefiniteError,
)

__all__ = [
    # Protocols
    "Statistic",
    "WeightSchedule",
    "Histogram",
    # Dimension tags
    "SCALAR",
    "VECTOR",
    "XY",
    # Exceptions
    "StreamStatsError",
    "ValidationError",
    "DimensionError",
    "IncompatibleMergeError",
    "NumericalError",
    "NotPositiveDefiniteError",
]
