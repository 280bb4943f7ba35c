"""
Core protocols for pystreamstats.

These define structural interfaces that accumulators and their external
collaborators must satisfy. We use Protocol (structural typing) rather than
ABC (nominal typing): a statistic is anything with update/merge/value and a
dimension tag, no base class required.

Design Principles:
    - Minimal contracts: prescribe only what every accumulator needs
    - Dimension tag is declared, never inferred from data
    - Type-safe: use generics to preserve the decoded value type
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

V = TypeVar('V', covariant=True)  # Decoded value type


@runtime_checkable
class Statistic(Protocol[V]):
    """
    A single streaming accumulator.

    Implementations hold kind-specific state that is advanced one
    observation at a time with a decay coefficient γ supplied by the
    owning Series.

    Class attributes:
        input_dim: Dimension tag from pystreamstats.core.dimensions
        default_weight: Zero-argument factory for the preferred Weight
    """

    input_dim: Any

    @property
    def n_features(self) -> int | None:
        """Vector width for vector/XY statistics, None for scalar ones."""
        ...

    def update(self, obs: Any, gamma: float) -> None:
        """
        Absorb one observation with decay coefficient gamma.

        Args:
            obs: One observation matching ``input_dim``
            gamma: Smoothing weight of the new observation, in [0, 1]
        """
        ...

    def value(self) -> V:
        """
        Decode the current estimate.

        Side-effect-free with respect to the accumulated state; may be
        expensive (e.g. solving a linear system).
        """
        ...

    def check_mergeable(self, other: Any) -> None:
        """
        Raise IncompatibleMergeError if ``other`` cannot be merged into self.

        Must not mutate either operand.
        """
        ...

    def merge(self, other: Any, gamma: float) -> None:
        """
        Fold ``other``'s accumulated state into self.

        Acts as though other's data had been observed with combined
        coefficient gamma.

        Raises:
            IncompatibleMergeError: If configurations differ
        """
        ...


@runtime_checkable
class WeightSchedule(Protocol):
    """
    Protocol for decay schedules.

    Maps "how many updates so far" to a decay coefficient γ in (0, 1].
    ``weight`` is pure given the counters; ``update_counters`` is the only
    mutation.
    """

    @property
    def nobs(self) -> int:
        """Total observations absorbed."""
        ...

    @property
    def nups(self) -> int:
        """Total update calls (a batch merge counts once)."""
        ...

    def weight(self, n2: int = 1) -> float:
        """Coefficient for ``n2`` new observations at the current counters."""
        ...

    def update_counters(self, n2: int = 1) -> None:
        """Advance nobs by n2 and nups by one."""
        ...

    def next(self, n2: int = 1) -> float:
        """Advance counters, then return the coefficient."""
        ...


@runtime_checkable
class Histogram(Protocol):
    """
    Fixed-edge histogram collaborator used by the OHistogram adapter.

    The adapter only computes bucket indices; bookkeeping lives here.
    """

    @property
    def nbins(self) -> int:
        """Number of buckets."""
        ...

    def increment(self, index: int) -> None:
        """Add one count to bucket ``index`` (0-based)."""
        ...

    def merge(self, other: Any) -> None:
        """Add another histogram's counts into this one."""
        ...
