"""
Input validation utilities for pystreamstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pystreamstats.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: non-real dtype {result.dtype}, expected real numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            expected=ndim,
            actual=array.ndim,
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_length(array: NDArray[Any], length: int, name: str) -> None:
    """
    Verify the first dimension of an array has exactly ``length`` entries.

    Args:
        array: Array to check
        length: Required length
        name: Parameter name for error messages

    Raises:
        DimensionError: If the length differs
    """
    actual = array.shape[0] if array.ndim > 0 else 0
    if actual != length:
        raise DimensionError(
            f"{name}: expected length {length}, got {actual}",
            expected=length,
            actual=actual,
        )


def check_positive(value: float, name: str) -> float:
    """
    Verify a scalar parameter is a finite number strictly greater than zero.

    Returns:
        The value as a float

    Raises:
        ValidationError: If value is not a positive real number
    """
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise ValidationError(f"{name}: expected a real number, got {type(value).__name__}")
    if not np.isfinite(value) or value <= 0:
        raise ValidationError(f"{name}: must be > 0, got {value}")
    return float(value)


def check_unit_interval(
    value: float,
    name: str,
    *,
    include_low: bool = False,
    include_high: bool = True,
) -> float:
    """
    Verify a scalar lies in the unit interval with the requested ends.

    The default accepts (0, 1], the domain of every decay coefficient.

    Returns:
        The value as a float

    Raises:
        ValidationError: If value is outside the interval
    """
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise ValidationError(f"{name}: expected a real number, got {type(value).__name__}")
    low_ok = value >= 0 if include_low else value > 0
    high_ok = value <= 1 if include_high else value < 1
    if not (low_ok and high_ok):
        interval = f"{'[' if include_low else '('}0, 1{']' if include_high else ')'}"
        raise ValidationError(f"{name}: must be in {interval}, got {value}")
    return float(value)


def check_probabilities(levels: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Validate a non-empty vector of probability levels in the open interval (0, 1).

    Returns:
        1D float64 array of levels, in the order given

    Raises:
        ValidationError: If any level is outside (0, 1) or the vector is empty
    """
    result = check_array(levels, name)
    if result.ndim == 0:
        result = result.reshape(1)
    check_1d(result, name)
    if result.size == 0:
        raise ValidationError(f"{name}: requires at least one level")
    bad = result[(result <= 0) | (result >= 1) | ~np.isfinite(result)]
    if bad.size > 0:
        raise ValidationError(
            f"{name}: levels must be in (0, 1), got {bad.tolist()}"
        )
    return result.astype(np.float64)


def check_integer_range(
    value: int,
    name: str,
    low: int,
    high: int | None = None,
) -> int:
    """
    Verify an integer parameter lies in [low, high] (no upper bound if high is None).

    Raises:
        ValidationError: If value is not an integer or out of range
    """
    if not isinstance(value, numbers.Integral) or isinstance(value, bool):
        raise ValidationError(f"{name}: expected an integer, got {type(value).__name__}")
    if value < low or (high is not None and value > high):
        bounds = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise ValidationError(f"{name}: must be {bounds}, got {value}")
    return int(value)
