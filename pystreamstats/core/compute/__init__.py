"""
Numeric primitives used by the streaming core.

Submodules:
    linalg: symmetric positive-definite solve, diagonal offset
"""

from pystreamstats.core.compute.linalg import (
    add_diagonal,
    is_positive_definite,
    spd_solve,
)

__all__ = [
    "add_diagonal",
    "is_positive_definite",
    "spd_solve",
]
