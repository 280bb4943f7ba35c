"""
Exception hierarchy for pystreamstats.

All exceptions inherit from StreamStatsError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Checks run before mutation, so a raised error leaves state untouched
"""


class StreamStatsError(Exception):
    """Base exception for all pystreamstats errors."""
    pass


class ValidationError(StreamStatsError):
    """
    Input validation failed.

    Raised when a constructor parameter is outside its domain, when an
    unknown option string is given, or when an explicit merge coefficient
    is outside [0, 1].
    """
    pass


class DimensionError(ValidationError):
    """
    Observation or weight-vector dimensions are inconsistent.

    Raised when an observation's length disagrees with the width a vector
    statistic was built for, or when a per-observation weight vector does
    not have one entry per observation in the batch.

    Attributes:
        expected: Expected size, if known
        actual: Size actually received, if known
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IncompatibleMergeError(StreamStatsError):
    """
    Two accumulators cannot be merged.

    Raised when two statistics (or two Series) of matching kind differ in
    configuration: quantile levels, regularization factors, register
    counts, batch sizes, and so on. Neither operand is modified.

    Attributes:
        left: Name of the receiving statistic kind
        right: Name of the incoming statistic kind
        reason: Short description of the mismatch
    """

    def __init__(
        self,
        message: str,
        left: str | None = None,
        right: str | None = None,
        reason: str | None = None
    ):
        super().__init__(message)
        self.left = left
        self.right = right
        self.reason = reason


class NumericalError(StreamStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised by the symmetric positive-definite solver when the Cholesky
    factorization fails.

    Attributes:
        matrix_name: Name/description of the problematic matrix
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
