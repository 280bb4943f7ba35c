"""
Linear algebra kernels for pystreamstats.

All functions follow these conventions:
    - CPU only, NumPy/SciPy (LAPACK under the hood)
    - Inputs are never modified in place
    - Failures are raised immediately with clear messages

Submodules:
    spd: Symmetric positive-definite solve and diagonal offset
"""

from pystreamstats.core.compute.linalg.spd import (
    add_diagonal,
    is_positive_definite,
    spd_solve,
)

__all__ = [
    "add_diagonal",
    "is_positive_definite",
    "spd_solve",
]
