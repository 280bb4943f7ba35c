"""
pystreamstats: one-pass, mergeable streaming statistics for Python.

Statistics are accumulated under a configurable decay schedule, and
partial results computed on disjoint partitions can be merged to
approximate (or, for EqualWeight, reproduce) the single-pass result.

Submodules:
    weights: Decay schedules (EqualWeight, ExponentialWeight, ...)
    stats: Streaming statistics (Mean, Variance, QuantileMM, HyperLogLog, ...)
    series: The Series engine binding a schedule to statistics
    core: Exceptions, protocols, validation, linear algebra primitives
"""

__version__ = "0.1.0"

from pystreamstats import weights
from pystreamstats import stats
from pystreamstats.series import Series, merge
from pystreamstats.weights import (
    Weight,
    EqualWeight,
    ExponentialWeight,
    LearningRate,
    LearningRate2,
    HarmonicWeight,
    McclainWeight,
    Bounded,
    Scaled,
)
from pystreamstats.stats import (
    Mean,
    Variance,
    Moments,
    CovMatrix,
    Extrema,
    OrderStats,
    Diff,
    Sum,
    QuantileMM,
    QuantileMSPI,
    QuantileSGD,
    HyperLogLog,
    ReservoirSample,
    LinReg,
    KMeans,
    OHistogram,
    FixedEdgeHistogram,
    CStat,
)
from pystreamstats.core.exceptions import (
    StreamStatsError,
    ValidationError,
    DimensionError,
    IncompatibleMergeError,
    NumericalError,
    NotPositiveDefiniteError,
)

__all__ = [
    "__version__",
    "weights",
    "stats",
    "Series",
    "merge",
    # Weights
    "Weight",
    "EqualWeight",
    "ExponentialWeight",
    "LearningRate",
    "LearningRate2",
    "HarmonicWeight",
    "McclainWeight",
    "Bounded",
    "Scaled",
    # Statistics
    "Mean",
    "Variance",
    "Moments",
    "CovMatrix",
    "Extrema",
    "OrderStats",
    "Diff",
    "Sum",
    "QuantileMM",
    "QuantileMSPI",
    "QuantileSGD",
    "HyperLogLog",
    "ReservoirSample",
    "LinReg",
    "KMeans",
    "OHistogram",
    "FixedEdgeHistogram",
    "CStat",
    # Exceptions
    "StreamStatsError",
    "ValidationError",
    "DimensionError",
    "IncompatibleMergeError",
    "NumericalError",
    "NotPositiveDefiniteError",
]
