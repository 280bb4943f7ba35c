"""
Probabilistic summaries: HyperLogLog and ReservoirSample.

Both ignore the decay coefficient. Their merges are exact in the sense
that matters for each sketch: a HyperLogLog union is the register-wise
maximum, and a merged reservoir is again a uniform sample of the union.
"""

from __future__ import annotations

import hashlib
import numbers
import struct
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pystreamstats.core.dimensions import HASHABLE
from pystreamstats.core.validation import check_integer_range
from pystreamstats.stats._base import OnlineStat
from pystreamstats.stats.order import _check_dtype, _convert

_TWO_32 = 2.0 ** 32


def _canonical_bytes(item: Any) -> bytes:
    """Stable byte encoding so equal numbers hash equally across types (1 == 1.0)."""
    if isinstance(item, (bytes, bytearray)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode('utf-8')
    if isinstance(item, numbers.Real):
        f = float(item)
        if not isinstance(item, numbers.Integral) or f == item:
            return struct.pack('<d', f)
    return repr(item).encode('utf-8')


def hash32(item: Any) -> int:
    """Deterministic 32-bit hash (BLAKE2b, 4-byte digest)."""
    digest = hashlib.blake2b(_canonical_bytes(item), digest_size=4).digest()
    return int.from_bytes(digest, 'little')


def _alpha(m: int) -> float:
    """Bias-correction constant of the HyperLogLog estimator."""
    if m == 16:
        return 0.673
    if m == 32:
        return 0.697
    if m == 64:
        return 0.709
    return 0.7213 / (1.0 + 1.079 / m)


class HyperLogLog(OnlineStat):
    """
    Approximate count of distinct elements with 2^b registers.

    Each item is hashed to 32 bits. The low b bits select a register; the
    register keeps the maximum over items of ρ, the number of leading zeros
    of the remaining high bits plus one.

    Args:
        b: Register-index bits, 4 <= b <= 16

    References:
        Flajolet, P. et al. (2007) "HyperLogLog: the analysis of a
        near-optimal cardinality estimation algorithm", AofA '07.
    """

    input_domain = HASHABLE

    def __init__(self, b: int):
        b = check_integer_range(b, 'b', 4, 16)
        self.m = 1 << b
        self.registers = np.zeros(self.m, dtype=np.uint32)
        self.mask = self.m - 1
        self.altmask = ~self.mask & 0xFFFFFFFF

    def _merge_conflict(self, other: HyperLogLog) -> str | None:
        if other.m != self.m:
            return f"have different number of registers ({self.m} vs {other.m})"
        return None

    def update(self, item: Any, gamma: float = 1.0) -> None:
        x = hash32(item)
        j = x & self.mask
        w = x & self.altmask
        rho = 32 - w.bit_length() + 1
        if rho > self.registers[j]:
            self.registers[j] = rho

    def value(self) -> float:
        m = self.m
        S = float(np.sum(np.ldexp(1.0, -self.registers.astype(np.int64))))
        E = _alpha(m) * m * m / S
        if E <= 2.5 * m:
            V = int(np.count_nonzero(self.registers == 0))
            if V != 0:
                return m * np.log(m / V)
            return E
        if E <= _TWO_32 / 30.0:
            return E
        return -_TWO_32 * np.log(1.0 - E / _TWO_32)

    def merge(self, other: HyperLogLog, gamma: float) -> None:
        self.check_mergeable(other)
        np.maximum(self.registers, other.registers, out=self.registers)

    def __repr__(self) -> str:
        return f"HyperLogLog({self.m} registers, estimate = {self.value()})"


class ReservoirSample(OnlineStat):
    """
    Uniform random sample of ``k`` items from a stream (Algorithm R).

    The first k observations fill the reservoir. Afterwards observation t
    draws j uniformly from {1, ..., t} and replaces slot j when j <= k.

    Args:
        k: Reservoir size, k >= 1
        dtype: Element type of the reservoir; integer types round each
            observation half-to-even
        seed: Seed for numpy.random.default_rng
    """

    def __init__(self, k: int, dtype: type = float, seed: int | None = None):
        k = check_integer_range(k, 'k', 1)
        self.dtype = _check_dtype(dtype)
        self._value = np.zeros(k, dtype=self.dtype)
        self.nobs = 0
        self.rng = np.random.default_rng(seed)

    @property
    def k(self) -> int:
        return len(self._value)

    def _merge_conflict(self, other: ReservoirSample) -> str | None:
        if other.k != self.k:
            return f"have different reservoir sizes ({self.k} vs {other.k})"
        return None

    def update(self, y: Any, gamma: float = 1.0) -> None:
        self.nobs += 1
        if self.nobs <= self.k:
            self._value[self.nobs - 1] = _convert(y, self.dtype)
        else:
            j = int(self.rng.integers(1, self.nobs + 1))
            if j <= self.k:
                self._value[j - 1] = _convert(y, self.dtype)

    def value(self) -> NDArray[Any]:
        return self._value[:min(self.k, self.nobs)].copy()

    def merge(self, other: ReservoirSample, gamma: float) -> None:
        """
        Keep a uniform sample of the union.

        A side that saw at most k items holds all of its data and is
        replayed item by item; otherwise each slot is drawn from a random
        permutation of other's reservoir with probability n2 / (n1 + n2).
        """
        self.check_mergeable(other)
        n1, n2 = self.nobs, other.nobs
        if n2 == 0:
            return
        if n2 <= self.k:
            for y in other.value():
                self.update(y)
        elif n1 <= self.k:
            mine = self.value()
            self._value[:] = other._value
            self.nobs = n2
            for y in mine:
                self.update(y)
        else:
            pool = self.rng.permutation(other._value)
            take = self.rng.random(self.k) < n2 / (n1 + n2)
            self._value[take] = pool[take]
            self.nobs = n1 + n2
