"""
Weight wrappers.

Bounded and Scaled hold an owned inner Weight and forward its counters
unchanged; only the coefficient is transformed.
"""

from pystreamstats.core.validation import check_unit_interval
from pystreamstats.core.exceptions import ValidationError
from pystreamstats.weights.base import Weight


class _WeightWrapper(Weight):
    """Composition helper: counters live in the wrapped weight."""

    _params = ('inner', 'lam')

    def __init__(self, inner: Weight, lam: float):
        if not isinstance(inner, Weight):
            raise ValidationError(
                f"inner: expected a Weight, got {type(inner).__name__}"
            )
        self.inner = inner
        self.lam = check_unit_interval(lam, 'lam')

    @property
    def nobs(self) -> int:
        return self.inner.nobs

    @property
    def nups(self) -> int:
        return self.inner.nups

    def update_counters(self, n2: int = 1) -> None:
        self.inner.update_counters(n2)


class Bounded(_WeightWrapper):
    """
    Give a Weight a lower bound: γ = max(inner γ, lam).

    Example:
        >>> w = Bounded(EqualWeight(), 0.05)
        >>> [w.next() for _ in range(30)][-1]
        0.05
    """

    def __init__(self, inner: Weight, lam: float = 0.05):
        super().__init__(inner, lam)

    def weight(self, n2: int = 1) -> float:
        return max(self.inner.weight(n2), self.lam)

    def __repr__(self) -> str:
        return f"Bounded({self.inner!r}, lam={self.lam})"


class Scaled(_WeightWrapper):
    """
    Scale a Weight by a constant: γ = lam * inner γ.

    Also built by multiplying a Weight by a number: ``0.5 * EqualWeight()``.
    """

    def weight(self, n2: int = 1) -> float:
        return self.inner.weight(n2) * self.lam

    def __repr__(self) -> str:
        return f"{self.lam} * {self.inner!r}"
