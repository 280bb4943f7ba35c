"""
Dimension tag constants for pystreamstats.

This module is the SINGLE SOURCE OF TRUTH for the input shape a statistic
accepts. Every statistic declares one of these as its ``input_dim`` class
attribute, and a Series only accepts statistics that share a tag. Scalar
statistics also declare an ``input_domain`` (REAL, COMPLEX or HASHABLE)
so a Series can reject an unusable batch before updating anything.

Usage:
    from pystreamstats.core.dimensions import SCALAR, VECTOR, XY

    if stat.input_dim == VECTOR:
        x = check_1d(...)
"""

# One number (or any hashable item, for HyperLogLog) per observation
SCALAR = 0

# One fixed-length real vector per observation
VECTOR = 1

# A (predictor vector, scalar response) pair per observation
XY = (1, 0)

# All tags as a frozenset for validation
ALL_DIMENSIONS = frozenset({SCALAR, VECTOR, XY})

# Value domains a scalar statistic accepts, strictest first
REAL = 'real'
COMPLEX = 'complex'
HASHABLE = 'hashable'

ALL_DOMAINS = (REAL, COMPLEX, HASHABLE)


def describe_dim(tag) -> str:
    """Human-readable name of a dimension tag for error messages."""
    if tag == SCALAR:
        return 'scalar'
    if tag == VECTOR:
        return 'vector'
    if tag == XY:
        return 'predictor/response'
    return repr(tag)


__all__ = [
    'SCALAR',
    'VECTOR',
    'XY',
    'ALL_DIMENSIONS',
    'REAL',
    'COMPLEX',
    'HASHABLE',
    'ALL_DOMAINS',
    'describe_dim',
]
