"""
Observation normalization for Series.update.

Turns whatever the caller passed (one observation or a batch, with an
optional coefficient or coefficient vector) into a validated list of
(observation, gamma) pairs. Everything is checked before the Series
touches any state, so a malformed batch never leaves a partial update.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike

from pystreamstats.core.dimensions import (
    COMPLEX,
    REAL,
    SCALAR,
    VECTOR,
    XY,
    describe_dim,
)
from pystreamstats.core.exceptions import DimensionError, ValidationError
from pystreamstats.core.validation import (
    check_1d,
    check_array,
    check_length,
    check_unit_interval,
)

Orientation = Literal['rows', 'cols']

# Scalar domains that restrict the item type; HASHABLE takes anything
_DOMAIN_TYPES = {
    REAL: (numbers.Real, 'a real number'),
    COMPLEX: (numbers.Number, 'a real or complex number'),
}


def _orient(matrix: np.ndarray, dim: Orientation) -> np.ndarray:
    """Return the matrix with one observation per row."""
    if dim == 'rows':
        return matrix
    if dim == 'cols':
        return matrix.T
    raise ValidationError(f"Unknown orientation: {dim!r}")


def _check_width(x: np.ndarray, n_features: int | None, name: str) -> None:
    if n_features is not None and x.shape[-1] != n_features:
        raise DimensionError(
            f"{name}: expected {n_features} variables per observation, got {x.shape[-1]}",
            expected=n_features,
            actual=x.shape[-1],
        )


def _scalar_observations(obs: Any, domain: str) -> list[Any]:
    if isinstance(obs, np.ndarray):
        if obs.ndim == 0:
            items = [obs.item()]
        elif obs.ndim == 1:
            items = list(obs)
        else:
            raise DimensionError(
                f"y: scalar statistics take a 1D batch, got {obs.ndim}D with shape {obs.shape}",
                expected=1,
                actual=obs.ndim,
            )
    elif isinstance(obs, (str, bytes)) or not isinstance(obs, Iterable):
        items = [obs]
    else:
        items = list(obs)
    if domain in _DOMAIN_TYPES:
        kind, label = _DOMAIN_TYPES[domain]
        for i, item in enumerate(items):
            if not isinstance(item, kind):
                raise ValidationError(
                    f"y: observation {i} is {type(item).__name__}, expected {label}"
                )
    return items


def _vector_observations(obs: ArrayLike, n_features: int | None, dim: Orientation) -> list[Any]:
    x = check_array(obs, 'x')
    if x.ndim == 1:
        _check_width(x, n_features, 'x')
        return [x]
    if x.ndim == 2:
        rows = _orient(x, dim)
        _check_width(rows, n_features, 'x')
        return list(rows)
    raise DimensionError(
        f"x: vector statistics take a 1D observation or 2D batch, got {x.ndim}D",
        actual=x.ndim,
    )


def _xy_observations(obs: Any, n_features: int | None, dim: Orientation) -> list[Any]:
    if not isinstance(obs, (tuple, list)) or len(obs) != 2:
        raise ValidationError(
            "obs: predictor/response statistics take an (x, y) pair"
        )
    x = check_array(obs[0], 'x')
    if x.ndim == 1:
        if np.ndim(obs[1]) != 0:
            raise DimensionError("y: expected a scalar response for a single predictor vector")
        _check_width(x, n_features, 'x')
        return [(x, float(obs[1]))]
    if x.ndim == 2:
        rows = _orient(x, dim)
        _check_width(rows, n_features, 'x')
        y = check_array(obs[1], 'y')
        check_1d(y, 'y')
        check_length(y, rows.shape[0], 'y')
        return [(row, float(yi)) for row, yi in zip(rows, y)]
    raise DimensionError(
        f"x: expected a 1D predictor vector or 2D predictor matrix, got {x.ndim}D",
        actual=x.ndim,
    )


def _coefficients(gamma: Any, n: int) -> list[float | None]:
    if gamma is None:
        return [None] * n
    if np.ndim(gamma) == 0:
        g = check_unit_interval(float(gamma), 'gamma', include_low=True)
        return [g] * n
    g = check_array(gamma, 'gamma')
    check_1d(g, 'gamma')
    if len(g) != n:
        raise DimensionError(
            f"Weight vector has length {len(g)} instead of {n}",
            expected=n,
            actual=len(g),
        )
    return [check_unit_interval(float(gi), 'gamma', include_low=True) for gi in g]


def observations(
    obs: Any,
    input_dim: Any,
    n_features: int | None,
    gamma: Any = None,
    dim: Orientation = 'rows',
    domain: str = REAL,
) -> list[tuple[Any, float | None]]:
    """
    Split ``obs`` into individual observations paired with their coefficient.

    Args:
        obs: One observation or a batch, shaped for ``input_dim``
        input_dim: Dimension tag shared by the Series' statistics
        n_features: Required vector width, or None
        gamma: None (use the schedule), a coefficient for every observation,
            or one coefficient per observation
        dim: 'rows' or 'cols', how a matrix batch is read
        domain: Value domain scalar observations must belong to

    Returns:
        List of (observation, gamma) pairs; gamma is None when the schedule
        should supply it

    Raises:
        DimensionError: If shapes disagree with the statistics or each other
        ValidationError: If a coefficient is outside [0, 1], or a scalar
            observation is outside ``domain``
    """
    if input_dim == SCALAR:
        items = _scalar_observations(obs, domain)
    elif input_dim == VECTOR:
        items = _vector_observations(obs, n_features, dim)
    elif input_dim == XY:
        items = _xy_observations(obs, n_features, dim)
    else:
        raise ValidationError(f"Unsupported input dimension: {describe_dim(input_dim)}")
    return list(zip(items, _coefficients(gamma, len(items))))
