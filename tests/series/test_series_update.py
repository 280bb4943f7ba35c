"""
Tests for Series construction and Series.update.

Covers observation shapes for every dimension tag, batch orientation,
explicit coefficients, and the guarantee that a rejected call leaves the
Series untouched.
"""

import numpy as np
import pytest

from pystreamstats import (
    CovMatrix,
    CStat,
    Extrema,
    LinReg,
    HyperLogLog,
    Mean,
    QuantileMM,
    Series,
    Sum,
    Variance,
)
from pystreamstats.core.exceptions import DimensionError, ValidationError
from pystreamstats.core.protocols import WeightSchedule
from pystreamstats.weights import EqualWeight, ExponentialWeight, LearningRate


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_default_weight(self):
        s = Series(Mean(), Variance())
        assert isinstance(s.weight, EqualWeight)
        assert s.nobs == 0

    def test_explicit_weight(self):
        w = ExponentialWeight(0.2)
        assert Series(Mean(), weight=w).weight is w

    def test_default_weight_disagreement_warns(self):
        with pytest.warns(RuntimeWarning, match="different default weights"):
            s = Series(Mean(), QuantileMM())
        assert isinstance(s.weight, EqualWeight)

    def test_no_warning_with_explicit_weight(self, recwarn):
        Series(Mean(), QuantileMM(), weight=LearningRate())
        assert len(recwarn) == 0

    def test_requires_a_statistic(self):
        with pytest.raises(ValidationError, match="at least one"):
            Series()

    def test_rejects_non_statistic(self):
        with pytest.raises(ValidationError, match="int"):
            Series(Mean(), 3)

    def test_rejects_shared_instance(self):
        m = Mean()
        with pytest.raises(ValidationError, match="more than once"):
            Series(m, m)

    def test_rejects_used_weight(self):
        w = EqualWeight()
        w.next()
        with pytest.raises(ValidationError, match="fresh"):
            Series(Mean(), weight=w)

    def test_rejects_non_weight(self):
        with pytest.raises(ValidationError, match="weight"):
            Series(Mean(), weight=0.1)

    def test_weights_satisfy_schedule_protocol(self):
        assert isinstance(LearningRate(), WeightSchedule)
        assert not isinstance(0.1, WeightSchedule)

    def test_rejects_unknown_dimension_tag(self):
        class MatrixMean(Mean):
            input_dim = "matrix"

        with pytest.raises(ValidationError, match="unsupported dimension"):
            Series(MatrixMean())

    def test_rejects_unknown_domain(self):
        class QuaternionMean(Mean):
            input_domain = "quaternion"

        with pytest.raises(ValidationError, match="unsupported input domain"):
            Series(QuaternionMean())

    def test_mixed_dimensions(self):
        with pytest.raises(DimensionError, match="scalar, vector"):
            Series(Mean(), CovMatrix(2))

    def test_mixed_widths(self):
        with pytest.raises(DimensionError, match="widths"):
            Series(CovMatrix(2), CovMatrix(3))

    def test_repr_lists_statistics(self):
        text = repr(Series(Mean(), Variance()))
        assert text.startswith("Series(EqualWeight(nobs=0), nobs = 0)")
        assert "├── Mean" in text
        assert "└── Variance" in text


# ═══════════════════════════════════════════════════════════════════════
# Scalar observations
# ═══════════════════════════════════════════════════════════════════════


class TestScalarUpdate:

    def test_single_value(self):
        s = Series(Mean())
        assert s.update(5.0) is s
        assert s.nobs == 1
        assert s.value() == (5.0,)

    def test_batch_equals_loop(self, normal_stream):
        a, b = Series(Mean(), Variance()), Series(Mean(), Variance())
        a.update(normal_stream)
        for y in normal_stream:
            b.update(y)
        assert a.value() == b.value()
        assert a.nobs == b.nobs == len(normal_stream)

    def test_nobs_matches_weight(self, normal_stream):
        s = Series(Mean(), weight=LearningRate())
        s.update(normal_stream[:10]).update(normal_stream[10:25])
        assert s.nobs == s.weight.nobs == 25
        assert s.weight.nups == 25

    def test_matrix_rejected(self):
        s = Series(Mean())
        with pytest.raises(DimensionError):
            s.update(np.zeros((3, 2)))
        assert s.nobs == 0

    def test_bad_item_mid_batch_leaves_state(self):
        s = Series(Mean(), Variance())
        s.update([1.0, 2.0])
        before = s.value()
        with pytest.raises(ValidationError, match="observation 1 is complex"):
            s.update([3.0, 2 + 1j])
        assert s.nobs == 2
        assert s.weight.nobs == 2
        assert s.value() == before
        assert s.stats[1].nobs == 2

    def test_string_rejected_for_real_statistics(self):
        s = Series(Sum())
        with pytest.raises(ValidationError, match="expected a real number"):
            s.update([1.0, "2"])
        assert s.value() == (0.0,)

    def test_zero_dimensional_array(self):
        s = Series(Mean())
        s.update(np.array(4.0))
        assert s.value() == (4.0,)

    def test_complex_accepted_when_every_statistic_takes_it(self):
        s = Series(CStat(Mean()), CStat(Variance()))
        s.update([1 + 1j, 3 - 1j])
        assert s.nobs == 2

    def test_complex_rejected_when_one_statistic_is_real(self):
        s = Series(CStat(Mean()), Mean())
        with pytest.raises(ValidationError, match="expected a real number"):
            s.update([1.0, 1 + 1j])
        assert s.nobs == 0

    def test_hashable_items(self):
        s = Series(HyperLogLog(4))
        s.update(["a", "b", ("c", 1)])
        assert s.nobs == 3

    def test_every_statistic_sees_every_observation(self):
        s = Series(Sum(int), Extrema())
        s.update([3, 1, 4, 1, 5])
        assert s.value() == (14, (1.0, 5.0))


# ═══════════════════════════════════════════════════════════════════════
# Vector and predictor/response observations
# ═══════════════════════════════════════════════════════════════════════


class TestVectorUpdate:

    def test_rows_and_cols_agree(self, rng):
        X = rng.standard_normal((50, 3))
        a, b = Series(CovMatrix(3)), Series(CovMatrix(3))
        a.update(X)
        b.update(X.T, dim='cols')
        np.testing.assert_allclose(a.value()[0], b.value()[0])
        assert a.nobs == b.nobs == 50

    def test_single_vector(self):
        s = Series(CovMatrix(2))
        s.update([1.0, 2.0])
        assert s.nobs == 1

    def test_wrong_width_leaves_state(self, rng):
        s = Series(CovMatrix(3))
        s.update(rng.standard_normal((5, 3)))
        before = s.value()[0]
        with pytest.raises(DimensionError) as exc_info:
            s.update(rng.standard_normal((5, 4)))
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 4
        assert s.nobs == 5
        np.testing.assert_array_equal(s.value()[0], before)

    def test_unknown_orientation(self, rng):
        with pytest.raises(ValidationError, match="orientation"):
            Series(CovMatrix(2)).update(rng.standard_normal((4, 2)), dim='diag')


class TestXYUpdate:

    def test_batch(self, regression_data):
        X, y, _ = regression_data
        s = Series(LinReg(3))
        s.update((X, y))
        assert s.nobs == len(y)

    def test_response_length_mismatch(self, regression_data):
        X, y, _ = regression_data
        s = Series(LinReg(3))
        with pytest.raises(DimensionError):
            s.update((X, y[:-1]))
        assert s.nobs == 0

    def test_requires_pair(self, regression_data):
        X, _, _ = regression_data
        with pytest.raises(ValidationError, match="pair"):
            Series(LinReg(3)).update(X)


# ═══════════════════════════════════════════════════════════════════════
# Explicit coefficients
# ═══════════════════════════════════════════════════════════════════════


class TestExplicitGamma:

    def test_scalar_gamma_overrides_schedule(self):
        s = Series(Mean())
        s.update([1.0, 2.0, 3.0], gamma=1.0)
        assert s.value() == (3.0,)
        assert s.weight.nobs == 3

    def test_gamma_vector(self):
        s = Series(Mean())
        s.update([4.0, 8.0], gamma=[1.0, 0.25])
        assert s.value() == (5.0,)

    def test_gamma_vector_length(self):
        s = Series(Mean())
        with pytest.raises(DimensionError, match="Weight vector has length 2 instead of 3"):
            s.update([1.0, 2.0, 3.0], gamma=[0.5, 0.5])
        assert s.nobs == 0

    @pytest.mark.parametrize("gamma", [-0.1, 1.5, [0.5, 2.0]])
    def test_gamma_out_of_range(self, gamma):
        s = Series(Mean())
        with pytest.raises(ValidationError, match="gamma"):
            s.update([1.0, 2.0], gamma=gamma)
        assert s.nobs == 0
        assert s.weight.nobs == 0

    def test_zero_gamma_ignores_observation(self):
        s = Series(Mean())
        s.update(2.0)
        s.update(100.0, gamma=0.0)
        assert s.value() == (2.0,)
        assert s.nobs == 2
