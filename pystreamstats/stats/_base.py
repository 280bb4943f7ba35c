"""
Shared plumbing for the concrete statistics.

OnlineStat is a convenience mixin, not a requirement: anything satisfying
pystreamstats.core.protocols.Statistic can live in a Series.
"""

from __future__ import annotations

import copy

from pystreamstats.core.dimensions import REAL, SCALAR
from pystreamstats.core.exceptions import IncompatibleMergeError
from pystreamstats.weights import EqualWeight


class OnlineStat:
    """
    Default dimension tag, default weight, copying and merge checks.

    Subclasses override ``_merge_conflict`` to describe configuration
    mismatches; ``check_mergeable`` turns a non-None description into an
    IncompatibleMergeError before any state is touched.
    """

    input_dim = SCALAR
    input_domain = REAL
    default_weight = EqualWeight

    @property
    def n_features(self) -> int | None:
        return None

    def copy(self):
        """Independent deep copy."""
        return copy.deepcopy(self)

    def _merge_conflict(self, other) -> str | None:
        return None

    def check_mergeable(self, other) -> None:
        """Raise IncompatibleMergeError if other cannot be merged into self."""
        left = type(self).__name__
        right = type(other).__name__
        if type(self) is not type(other):
            raise IncompatibleMergeError(
                f"Merge failed. Cannot merge {right} into {left}.",
                left=left, right=right, reason='different kinds',
            )
        reason = self._merge_conflict(other)
        if reason is not None:
            raise IncompatibleMergeError(
                f"Merge failed. {left} objects {reason}.",
                left=left, right=right, reason=reason,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}: {self.value()}"
