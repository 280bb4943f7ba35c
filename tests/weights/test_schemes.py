"""
Tests for decay schedules.

Validates the coefficient formula of every scheme, counter bookkeeping,
and construction-time parameter validation.
"""

import numpy as np
import pytest

from pystreamstats.core.exceptions import ValidationError
from pystreamstats.weights import (
    EqualWeight,
    ExponentialWeight,
    HarmonicWeight,
    LearningRate,
    LearningRate2,
    McclainWeight,
)


def _schedule(w, n):
    return [w.next() for _ in range(n)]


class TestCounters:
    """nobs counts observations, nups counts update calls."""

    def test_fresh_weight(self):
        w = EqualWeight()
        assert w.nobs == 0
        assert w.nups == 0

    def test_next_advances_both(self):
        w = EqualWeight()
        w.next()
        w.next()
        assert w.nobs == 2
        assert w.nups == 2

    def test_batch_advances_nups_once(self):
        w = EqualWeight()
        w.next(5)
        assert w.nobs == 5
        assert w.nups == 1

    def test_weight_is_pure(self):
        w = LearningRate()
        w.next()
        w.next()
        assert w.weight() == w.weight()
        assert w.nobs == 2


class TestEqualWeight:

    def test_one_over_t(self):
        np.testing.assert_allclose(_schedule(EqualWeight(), 4), [1, 1 / 2, 1 / 3, 1 / 4])

    def test_batch_share(self):
        w = EqualWeight()
        w.next(3)
        assert w.next(2) == pytest.approx(2 / 5)


class TestExponentialWeight:

    def test_constant(self):
        assert _schedule(ExponentialWeight(0.2), 5) == [0.2] * 5

    def test_from_lookback(self):
        assert ExponentialWeight.from_lookback(19).lam == pytest.approx(0.1)

    @pytest.mark.parametrize("lam", [0.0, -0.1, 1.5])
    def test_invalid(self, lam):
        with pytest.raises(ValidationError, match="lam"):
            ExponentialWeight(lam)

    def test_invalid_lookback(self):
        with pytest.raises(ValidationError, match="lookback"):
            ExponentialWeight.from_lookback(0)


class TestLearningRate:

    def test_power_decay(self):
        np.testing.assert_allclose(
            _schedule(LearningRate(0.6), 4), [t ** -0.6 for t in range(1, 5)]
        )

    def test_counts_update_calls(self):
        w = LearningRate(0.5)
        w.next(100)
        assert w.next(100) == pytest.approx(2 ** -0.5)

    def test_invalid(self):
        with pytest.raises(ValidationError, match="r"):
            LearningRate(0.0)


class TestLearningRate2:

    def test_formula(self):
        np.testing.assert_allclose(
            _schedule(LearningRate2(0.5), 4), [1 / (1 + 0.5 * (t - 1)) for t in range(1, 5)]
        )

    def test_invalid(self):
        with pytest.raises(ValidationError, match="c"):
            LearningRate2(-1.0)


class TestHarmonicWeight:

    def test_formula(self):
        np.testing.assert_allclose(
            _schedule(HarmonicWeight(10.0), 4), [10 / (10 + t - 1) for t in range(1, 5)]
        )

    @pytest.mark.parametrize("a", [0.0, -2.0])
    def test_invalid(self, a):
        with pytest.raises(ValidationError, match="a"):
            HarmonicWeight(a)


class TestMcclainWeight:

    def test_recursion(self):
        alpha = 0.1
        expected = [1.0]
        for _ in range(5):
            expected.append(expected[-1] / (1 + expected[-1] - alpha))
        np.testing.assert_allclose(_schedule(McclainWeight(alpha), 6), expected)

    def test_approaches_alpha(self):
        assert _schedule(McclainWeight(0.1), 2000)[-1] == pytest.approx(0.1, abs=1e-3)

    @pytest.mark.parametrize("alpha", [0.0, 1.0, 1.5])
    def test_invalid(self, alpha):
        with pytest.raises(ValidationError, match="alpha"):
            McclainWeight(alpha)


class TestCopyAndEquality:

    def test_copy_is_independent(self):
        w = EqualWeight()
        w.next()
        c = w.copy()
        c.next()
        assert w.nobs == 1
        assert c.nobs == 2

    def test_equality_ignores_nups(self):
        a, b = EqualWeight(), EqualWeight()
        a.next(4)
        for _ in range(4):
            b.next()
        assert a == b

    def test_different_parameters_not_equal(self):
        assert ExponentialWeight(0.1) != ExponentialWeight(0.2)
        assert ExponentialWeight(0.1) != LearningRate(0.1)

    def test_repr(self):
        assert repr(ExponentialWeight(0.5)) == "ExponentialWeight(lam=0.5, nobs=0)"
