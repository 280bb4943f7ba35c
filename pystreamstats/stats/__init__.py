"""
Statistic library.

Every statistic implements update(obs, gamma), value() and merge(other, gamma)
and declares the input shape it accepts with ``input_dim``.

Central tendency and spread:
    Mean, Variance, Moments, CovMatrix
Extremal and order:
    Extrema, OrderStats, Diff, Sum
Quantiles:
    QuantileMM, QuantileMSPI, QuantileSGD
Probabilistic:
    HyperLogLog, ReservoirSample
Model fitting:
    LinReg, KMeans
Adapters:
    OHistogram (with FixedEdgeHistogram), CStat
"""

from pystreamstats.stats.moments import Mean, Variance, Moments, CovMatrix
from pystreamstats.stats.order import Extrema, OrderStats, Diff, Sum
from pystreamstats.stats.quantile import QuantileMM, QuantileMSPI, QuantileSGD
from pystreamstats.stats.sketch import HyperLogLog, ReservoirSample
from pystreamstats.stats.models import LinReg, KMeans
from pystreamstats.stats.histogram import OHistogram, FixedEdgeHistogram
from pystreamstats.stats.cstat import CStat

__all__ = [
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
]
