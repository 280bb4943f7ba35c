"""
Decay schedules.

A Weight turns the number of updates seen so far into the coefficient γ
used for exponential smoothing: new = old + γ (observed - old).

Schemes:
    EqualWeight        γ = 1 / t (exact averaging)
    ExponentialWeight  γ = lam
    LearningRate       γ = 1 / t^r
    LearningRate2      γ = 1 / (1 + c (t - 1))
    HarmonicWeight     γ = a / (a + t - 1)
    McclainWeight      γ_t = γ_{t-1} / (1 + γ_{t-1} - alpha)

Wrappers:
    Bounded(w, lam)    max(γ, lam)
    Scaled(w, lam)     lam * γ
"""

from pystreamstats.weights.base import Weight
from pystreamstats.weights.schemes import (
    EqualWeight,
    ExponentialWeight,
    LearningRate,
    LearningRate2,
    HarmonicWeight,
    McclainWeight,
)
from pystreamstats.weights.wrappers import Bounded, Scaled

__all__ = [
    "Weight",
    "EqualWeight",
    "ExponentialWeight",
    "LearningRate",
    "LearningRate2",
    "HarmonicWeight",
    "McclainWeight",
    "Bounded",
    "Scaled",
]
