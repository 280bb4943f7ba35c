"""
Series: one decay schedule driving a fixed collection of statistics.

A Series owns exactly one Weight and an ordered tuple of statistics that
all accept the same kind of observation. Every logical observation
advances the Weight once and feeds the same coefficient γ to every
statistic, so the invariant ``series.nobs == series.weight.nobs`` holds
after every update and merge.

Merging two Series that were fit on disjoint partitions approximates (and
for EqualWeight with the "append" policy, reproduces) the Series fit on
the concatenated data.
"""

from __future__ import annotations

import copy
import numbers
import warnings
from typing import Any, Literal

from pystreamstats.core.exceptions import (
    DimensionError,
    IncompatibleMergeError,
    ValidationError,
)
from pystreamstats.core.dimensions import (
    ALL_DIMENSIONS,
    ALL_DOMAINS,
    REAL,
    describe_dim,
)
from pystreamstats.core.protocols import Statistic, WeightSchedule
from pystreamstats.core.validation import check_unit_interval
from pystreamstats.series._ingest import Orientation, observations
from pystreamstats.weights import Weight

MergeMethod = Literal['append', 'mean', 'singleton']

MERGE_METHODS = ('append', 'mean', 'singleton')


def _default_weight(stats: tuple[Any, ...]) -> Weight:
    """Instantiate the weight the statistics prefer (the first one's, if they disagree)."""
    factories = [s.default_weight for s in stats]
    first = factories[0]
    if any(f is not first for f in factories[1:]):
        names = sorted({f.__name__ for f in factories})
        warnings.warn(
            f"Statistics prefer different default weights ({', '.join(names)}); "
            f"using {first.__name__}(). Pass weight= to choose explicitly.",
            RuntimeWarning,
            stacklevel=3,
        )
    return first()


def _strictest_domain(stats: tuple[Any, ...]) -> str:
    """Value domain every statistic can absorb (REAL unless all accept more)."""
    domains = [getattr(s, 'input_domain', REAL) for s in stats]
    for d in domains:
        if d not in ALL_DOMAINS:
            raise ValidationError(f"stats: unsupported input domain {d!r}")
    return min(domains, key=ALL_DOMAINS.index)


class Series:
    """
    Track any number of statistics under one decay schedule.

    Args:
        *stats: Statistics sharing one dimension tag (and vector width)
        weight: Decay schedule; defaults to the statistics' preferred one

    Raises:
        ValidationError: If no statistic is given, an argument is not a
            statistic, a statistic is passed twice, or weight is not a
            fresh Weight
        DimensionError: If the statistics disagree on input shape

    Example:
        >>> s = Series(Mean(), Variance())
        >>> s.update([1.0, 2.0, 3.0, 4.0])
        >>> s.value()
        (2.5, 1.6666666666666667)
    """

    def __init__(self, *stats: Statistic, weight: Weight | None = None):
        if not stats:
            raise ValidationError("Series requires at least one statistic")
        for s in stats:
            if not isinstance(s, Statistic):
                raise ValidationError(
                    f"stats: {type(s).__name__} does not implement update/value/merge"
                )
        if len({id(s) for s in stats}) != len(stats):
            raise ValidationError("stats: the same statistic instance was passed more than once")

        dims = {s.input_dim for s in stats}
        unknown = dims - ALL_DIMENSIONS
        if unknown:
            raise ValidationError(
                f"stats: unsupported dimension tag(s) {sorted(unknown, key=repr)}"
            )
        if len(dims) > 1:
            raise DimensionError(
                "stats: statistics take different observation kinds "
                f"({', '.join(sorted(describe_dim(d) for d in dims))})"
            )
        widths = {s.n_features for s in stats}
        if len(widths) > 1:
            raise DimensionError(
                f"stats: statistics expect different vector widths {sorted(widths, key=repr)}"
            )

        if weight is None:
            weight = _default_weight(stats)
        elif not isinstance(weight, WeightSchedule):
            raise ValidationError(f"weight: expected a Weight, got {type(weight).__name__}")
        if weight.nobs != 0:
            raise ValidationError(
                f"weight: expected a fresh Weight, got one with nobs={weight.nobs}"
            )

        self._stats = tuple(stats)
        self._weight = weight
        self._input_dim = dims.pop()
        self._n_features = widths.pop()
        self._domain = _strictest_domain(stats)
        self._n = 0

    # --- accessors ---

    @property
    def stats(self) -> tuple[Statistic, ...]:
        """The owned statistics, in update order."""
        return self._stats

    @property
    def weight(self) -> Weight:
        """The owned decay schedule."""
        return self._weight

    @property
    def nobs(self) -> int:
        """Number of logical observations absorbed."""
        return self._n

    @property
    def input_dim(self):
        return self._input_dim

    @property
    def n_features(self) -> int | None:
        return self._n_features

    def value(self) -> tuple[Any, ...]:
        """Tuple of every statistic's value, in order."""
        return tuple(s.value() for s in self._stats)

    def copy(self) -> Series:
        """Independent deep copy (weight and statistics included)."""
        return copy.deepcopy(self)

    # --- ingestion ---

    def update(
        self,
        obs: Any,
        gamma: Any = None,
        dim: Orientation = 'rows',
    ) -> Series:
        """
        Absorb one observation or a batch.

        A batch (sequence of scalars, sequence/matrix of vectors, or an
        (X, y) pair with a predictor matrix) is processed as that many
        individual updates, in order.

        Args:
            obs: Observation(s) shaped for the statistics' dimension tag
            gamma: None to use the schedule; a coefficient in [0, 1] applied
                to every observation of the call; or one coefficient per
                observation. Explicit coefficients bypass the schedule but
                still advance its counters.
            dim: 'rows' (default) or 'cols', how a matrix batch is read

        Returns:
            self

        Raises:
            DimensionError: If shapes disagree; no state is modified
            ValidationError: If a coefficient is outside [0, 1], or a scalar
                observation is not a value every statistic accepts (a real
                number, unless all statistics take complex or hashable items);
                no state is modified
        """
        items = observations(
            obs, self._input_dim, self._n_features, gamma, dim, domain=self._domain
        )
        for ob, g in items:
            self._n += 1
            if g is None:
                g = self._weight.next(1)
            else:
                self._weight.update_counters(1)
            for stat in self._stats:
                stat.update(ob, g)
        return self

    # --- merging ---

    def check_mergeable(self, other: Series) -> None:
        """
        Raise IncompatibleMergeError unless other holds a structurally
        identical collection of statistics. Mutates nothing.
        """
        if not isinstance(other, Series):
            raise IncompatibleMergeError(
                f"Merge failed. Cannot merge {type(other).__name__} into Series.",
                left='Series', right=type(other).__name__, reason='different kinds',
            )
        if len(other._stats) != len(self._stats):
            raise IncompatibleMergeError(
                "Merge failed. Series hold a different number of statistics "
                f"({len(self._stats)} vs {len(other._stats)}).",
                left='Series', right='Series', reason='different number of statistics',
            )
        for mine, theirs in zip(self._stats, other._stats):
            mine.check_mergeable(theirs)

    def _merge_coefficient(self, other: Series, method: MergeMethod | float) -> float:
        """Advance the schedule by other's count and return the shared γ."""
        n2 = other.nobs
        if not isinstance(method, str):
            self._weight.update_counters(n2)
            return float(method)
        if method == 'append':
            return self._weight.next(n2)
        self._weight.update_counters(n2)
        if method == 'mean':
            return 0.5 * (self._weight.weight() + other._weight.weight())
        return self._weight.weight(1)

    def merge(self, other: Series, method: MergeMethod | float = 'append') -> Series:
        """
        Fold other's statistics into this Series (in place).

        Policies:
            'append'     other's data arrived right after self's:
                         γ = self.weight at n2 = other.nobs
            'mean'       average of both schedules' current coefficients
            'singleton'  other counts as a single pseudo-observation
            float        explicit coefficient in [0, 1]

        Merging a Series with zero observations is a no-op. "append" is
        order-sensitive; "mean" and an explicit 0.5 are symmetric.

        Returns:
            self

        Raises:
            ValidationError: Unknown policy or coefficient outside [0, 1]
            IncompatibleMergeError: Statistic collections differ
        """
        if isinstance(method, str):
            if method not in MERGE_METHODS:
                raise ValidationError(
                    f"Unknown merge method: {method!r}, expected one of {MERGE_METHODS}"
                )
        elif isinstance(method, numbers.Real) and not isinstance(method, bool):
            method = check_unit_interval(method, 'gamma', include_low=True)
        else:
            raise ValidationError(
                f"method: expected a policy name or a coefficient, got {type(method).__name__}"
            )
        self.check_mergeable(other)

        if other.nobs == 0:
            return self
        gamma = self._merge_coefficient(other, method)
        self._n += other.nobs
        for mine, theirs in zip(self._stats, other._stats):
            mine.merge(theirs, gamma)
        return self

    def __repr__(self) -> str:
        lines = [f"Series({self._weight!r}, nobs = {self._n})"]
        for i, s in enumerate(self._stats):
            branch = '└──' if i == len(self._stats) - 1 else '├──'
            lines.append(f"  {branch} {s!r}")
        return '\n'.join(lines)


def merge(s1: Series, s2: Series, method: MergeMethod | float = 'append') -> Series:
    """Merged copy of s1 and s2; neither input is modified."""
    return s1.copy().merge(s2, method)
