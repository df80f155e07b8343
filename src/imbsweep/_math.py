"""
Low-level numerical helpers used throughout the imbsweep package.

The functions in this module are intentionally lightweight so they can be
imported by the sampler, the runner and the aggregator without creating
cyclic dependencies.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

__all__ = [
    "_floor_fraction",
    "_nan_ratio",
    "_nan_mean",
    "_rankdata_average",
]


def _floor_fraction(n: int, frac: Fraction) -> int:
    """Exact ``floor(frac * n)`` without going through binary floating point."""
    scaled = Fraction(int(n)) * frac
    return int(scaled.numerator // scaled.denominator)


def _nan_ratio(num: float, den: float) -> float:
    """``num / den`` that yields NaN (no warning, no exception) when ``den == 0``."""
    if den == 0:
        return float("nan")
    return float(num) / float(den)


def _nan_mean(values: Sequence[float] | np.ndarray) -> float:
    """Arithmetic mean where a single NaN makes the result NaN."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return float("nan")
    return float(np.mean(arr))


def _rankdata_average(a: np.ndarray) -> np.ndarray:
    """Tie-aware 1-based ranking with averaging; helper for the rank AUC."""
    a = np.asarray(a, dtype=np.float64)
    order = np.argsort(a, kind="mergesort")
    ranks = np.empty(a.size, dtype=np.float64)
    i = 0
    n = a.size
    while i < n:
        j = i + 1
        while j < n and a[order[j]] == a[order[i]]:
            j += 1
        ranks[order[i:j]] = 0.5 * (i + j - 1) + 1.0
        i = j
    return ranks
