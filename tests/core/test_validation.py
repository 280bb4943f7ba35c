"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object/complex rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_length: exact first-dimension length
    - check_positive / check_unit_interval / check_integer_range: scalar domains
    - check_probabilities: quantile levels
"""

import numpy as np
import pytest

from pystreamstats.core.exceptions import DimensionError, ValidationError
from pystreamstats.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_finite,
    check_integer_range,
    check_length,
    check_ndim,
    check_positive,
    check_probabilities,
    check_unit_interval,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-real data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert isinstance(result, np.ndarray)
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_scalar_becomes_0d(self):
        result = check_array(2.5, "lam")
        assert result.ndim == 0

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="x"):
            check_array(["a", "b"], "x")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1, 2], [3]], "x")

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="non-real"):
            check_array([1 + 2j], "x")


# ═══════════════════════════════════════════════════════════════════════
# check_finite / dimensionality
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "x")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match="1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "x")


class TestDimensions:

    def test_check_ndim_mismatch(self):
        with pytest.raises(DimensionError) as exc_info:
            check_ndim(np.zeros((2, 2)), 1, "x")
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 2

    def test_check_1d_and_2d(self):
        check_1d(np.zeros(3), "x")
        check_2d(np.zeros((3, 2)), "X")
        with pytest.raises(DimensionError):
            check_2d(np.zeros(3), "X")

    def test_check_length(self):
        check_length(np.zeros(4), 4, "x")
        with pytest.raises(DimensionError, match="expected length 3, got 4"):
            check_length(np.zeros(4), 3, "x")


# ═══════════════════════════════════════════════════════════════════════
# Scalar parameter domains
# ═══════════════════════════════════════════════════════════════════════


class TestScalarDomains:

    def test_check_positive(self):
        assert check_positive(2, "a") == 2.0
        for bad in (0, -1.0, np.inf):
            with pytest.raises(ValidationError, match="a"):
                check_positive(bad, "a")

    def test_check_positive_rejects_non_numbers(self):
        with pytest.raises(ValidationError, match="expected a real number"):
            check_positive("3", "a")

    def test_unit_interval_default_is_half_open(self):
        assert check_unit_interval(1.0, "lam") == 1.0
        with pytest.raises(ValidationError, match=r"\(0, 1\]"):
            check_unit_interval(0.0, "lam")

    def test_unit_interval_closed(self):
        assert check_unit_interval(0.0, "gamma", include_low=True) == 0.0
        with pytest.raises(ValidationError):
            check_unit_interval(1.5, "gamma", include_low=True)

    def test_unit_interval_open(self):
        with pytest.raises(ValidationError, match=r"\(0, 1\)"):
            check_unit_interval(1.0, "alpha", include_high=False)

    def test_integer_range(self):
        assert check_integer_range(4, "b", 4, 16) == 4
        with pytest.raises(ValidationError, match=r"\[4, 16\]"):
            check_integer_range(17, "b", 4, 16)
        with pytest.raises(ValidationError, match="expected an integer"):
            check_integer_range(4.0, "b", 4, 16)
        with pytest.raises(ValidationError, match=">= 1"):
            check_integer_range(0, "k", 1)


class TestCheckProbabilities:

    def test_valid_levels(self):
        np.testing.assert_array_equal(
            check_probabilities([0.1, 0.9], "tau"), [0.1, 0.9]
        )

    def test_scalar_level(self):
        assert check_probabilities(0.5, "tau").shape == (1,)

    @pytest.mark.parametrize("levels", [[0.0, 0.5], [0.5, 1.0], [1.2]])
    def test_out_of_range(self, levels):
        with pytest.raises(ValidationError, match=r"\(0, 1\)"):
            check_probabilities(levels, "tau")

    def test_empty(self):
        with pytest.raises(ValidationError, match="at least one"):
            check_probabilities([], "tau")
