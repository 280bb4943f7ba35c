"""Base class for decay schedules."""

import copy
from abc import ABC, abstractmethod


class Weight(ABC):
    """
    Decay schedule mapping an observation count to a coefficient γ in (0, 1].

    A Weight owns two counters:
        - nobs: total observations absorbed
        - nups: total update calls (differs from nobs when one call folds
          in a batch, e.g. an "append" merge of another Series)

    ``weight(n2)`` is pure given the counters. Every call that represents an
    actual update must go through ``next(n2)``, which advances the counters
    first and then evaluates the schedule. Callers that only need to peek at
    γ call ``weight`` directly.

    Subclasses implement ``weight`` and list their configuration in
    ``_params`` (used for equality and repr).
    """

    _params: tuple[str, ...] = ()

    def __init__(self):
        self._nobs = 0
        self._nups = 0

    @property
    def nobs(self) -> int:
        """Total observations absorbed."""
        return self._nobs

    @property
    def nups(self) -> int:
        """Total update calls."""
        return self._nups

    def update_counters(self, n2: int = 1) -> None:
        """Advance nobs by n2 and nups by one."""
        self._nobs += n2
        self._nups += 1

    @abstractmethod
    def weight(self, n2: int = 1) -> float:
        """Coefficient for n2 new observations at the current counters."""

    def next(self, n2: int = 1) -> float:
        """Advance the counters, then return the coefficient."""
        self.update_counters(n2)
        return self.weight(n2)

    def copy(self) -> 'Weight':
        """Independent deep copy, counters included."""
        return copy.deepcopy(self)

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (
            all(getattr(self, p) == getattr(other, p) for p in self._params)
            and self.nobs == other.nobs
        )

    def __hash__(self):
        return hash((type(self).__name__, tuple(getattr(self, p) for p in self._params)))

    def __rmul__(self, lam):
        from pystreamstats.weights.wrappers import Scaled
        return Scaled(self, lam)

    def __repr__(self) -> str:
        fields = [f"{p}={getattr(self, p)!r}" for p in self._params]
        fields.append(f"nobs={self.nobs}")
        return f"{type(self).__name__}({', '.join(fields)})"
