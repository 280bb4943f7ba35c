"""
Tests for the pystreamstats exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via StreamStatsError)
    - Diagnostic attributes on DimensionError, IncompatibleMergeError,
      NotPositiveDefiniteError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pystreamstats.core.exceptions import (
    DimensionError,
    IncompatibleMergeError,
    NotPositiveDefiniteError,
    NumericalError,
    StreamStatsError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via StreamStatsError."""

    def test_validation_error_is_base_error(self):
        with pytest.raises(StreamStatsError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_incompatible_merge_is_base_error(self):
        with pytest.raises(StreamStatsError):
            raise IncompatibleMergeError("different quantiles")

    def test_incompatible_merge_is_not_validation_error(self):
        """Merge mismatches are a separate category from bad input."""
        err = IncompatibleMergeError("different quantiles")
        assert not isinstance(err, ValidationError)

    def test_not_positive_definite_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NotPositiveDefiniteError("not PD")

    def test_numerical_error_is_base_error(self):
        with pytest.raises(StreamStatsError):
            raise NumericalError("overflow")


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionError:
    """DimensionError carries expected/actual sizes."""

    def test_all_attributes(self):
        err = DimensionError("x: expected length 3, got 2", expected=3, actual=2)
        assert str(err) == "x: expected length 3, got 2"
        assert err.expected == 3
        assert err.actual == 2

    def test_defaults_are_none(self):
        err = DimensionError("wrong shape")
        assert err.expected is None
        assert err.actual is None


class TestIncompatibleMergeError:
    """IncompatibleMergeError names both operands and the reason."""

    def test_all_attributes(self):
        err = IncompatibleMergeError(
            "Merge failed.",
            left="QuantileMM",
            right="QuantileMM",
            reason="track different quantiles",
        )
        assert err.left == "QuantileMM"
        assert err.right == "QuantileMM"
        assert err.reason == "track different quantiles"

    def test_defaults_are_none(self):
        err = IncompatibleMergeError("Merge failed.")
        assert err.left is None
        assert err.right is None
        assert err.reason is None


class TestNotPositiveDefiniteError:
    """NotPositiveDefiniteError carries the matrix name."""

    def test_matrix_name(self):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            raise NotPositiveDefiniteError("Cholesky failed", matrix_name="XtX")
        assert exc_info.value.matrix_name == "XtX"
        assert str(exc_info.value) == "Cholesky failed"

    def test_default_is_none(self):
        assert NotPositiveDefiniteError("not PD").matrix_name is None
