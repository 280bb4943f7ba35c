"""
Series engine.

Public API:
    Series(*stats, weight=None)   bind one decay schedule to statistics
    Series.update(obs, gamma)     absorb observations
    Series.merge(other, method)   fold another Series in place
    merge(s1, s2, method)         merged copy
"""

from pystreamstats.series.series import Series, merge, MergeMethod, MERGE_METHODS

__all__ = [
    "Series",
    "merge",
    "MergeMethod",
    "MERGE_METHODS",
]
