"""
Decay schedule implementations.

All schemes follow the convention:
- Counters are advanced before the coefficient is evaluated, so the first
  observation of every schedule sees nobs = nups = 1
- Every coefficient lies in (0, 1]
- Parameters are validated at construction and never change afterwards
"""

from pystreamstats.core.validation import (
    check_integer_range,
    check_positive,
    check_unit_interval,
)
from pystreamstats.weights.base import Weight


class EqualWeight(Weight):
    """
    Equally weighted observations.

    Weight at observation t is γ = 1 / t, which turns exponential smoothing
    into an exact running average. Folding in n2 observations at once gives
    γ = n2 / nobs, the exact share of the new block.

    Example:
        >>> w = EqualWeight()
        >>> [w.next() for _ in range(4)]
        [1.0, 0.5, 0.3333333333333333, 0.25]
    """

    def weight(self, n2: int = 1) -> float:
        return n2 / self.nobs


class ExponentialWeight(Weight):
    """
    Exponentially weighted observations (constant coefficient).

    Weight at observation t is γ = lam for every t.

    Args:
        lam: Constant coefficient, 0 < lam <= 1

    Example:
        >>> ExponentialWeight(0.1).next()
        0.1
        >>> ExponentialWeight.from_lookback(19).lam
        0.1
    """

    _params = ('lam',)

    def __init__(self, lam: float = 0.1):
        super().__init__()
        self.lam = check_unit_interval(lam, 'lam')

    @classmethod
    def from_lookback(cls, lookback: int) -> 'ExponentialWeight':
        """Build from an effective window length: lam = 2 / (lookback + 1)."""
        lookback = check_integer_range(lookback, 'lookback', 1)
        return cls(2.0 / (lookback + 1))

    def weight(self, n2: int = 1) -> float:
        return self.lam


class LearningRate(Weight):
    """
    Slowly decreasing weights for stochastic approximation.

    Weight at update t is γ = 1 / t^r. Counts update calls (nups), not
    observations.

    Args:
        r: Decay exponent, 0 < r <= 1
    """

    _params = ('r',)

    def __init__(self, r: float = 0.6):
        super().__init__()
        self.r = check_unit_interval(r, 'r')

    def weight(self, n2: int = 1) -> float:
        return self.nups ** -self.r


class LearningRate2(Weight):
    """
    Slowly decreasing weights for stochastic approximation.

    Weight at update t is γ = 1 / (1 + c (t - 1)).

    Args:
        c: Rate constant, c > 0
    """

    _params = ('c',)

    def __init__(self, c: float = 0.5):
        super().__init__()
        self.c = check_positive(c, 'c')

    def weight(self, n2: int = 1) -> float:
        return 1.0 / (1.0 + self.c * (self.nups - 1))


class HarmonicWeight(Weight):
    """
    Harmonically decreasing weights.

    Weight at observation t is γ = a / (a + t - 1).

    Args:
        a: Shape constant, a > 0
    """

    _params = ('a',)

    def __init__(self, a: float = 10.0):
        super().__init__()
        self.a = check_positive(a, 'a')

    def weight(self, n2: int = 1) -> float:
        return self.a / (self.a + self.nobs - 1)


class McclainWeight(Weight):
    """
    Smoothed version of a bounded equal weight.

    Weights asymptotically approach alpha:
        γ_1 = 1
        γ_t = γ_{t-1} / (1 + γ_{t-1} - alpha)

    The recursion steps once per update call, so ``weight`` stays pure.

    Args:
        alpha: Asymptotic coefficient, 0 < alpha < 1
    """

    _params = ('alpha',)

    def __init__(self, alpha: float = 0.1):
        super().__init__()
        self.alpha = check_unit_interval(alpha, 'alpha', include_high=False)
        self._last = 1.0

    def update_counters(self, n2: int = 1) -> None:
        super().update_counters(n2)
        if self.nups > 1:
            self._last = self._last / (1.0 + self._last - self.alpha)

    def weight(self, n2: int = 1) -> float:
        return self._last
