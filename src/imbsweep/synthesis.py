"""
Synthetic two-group dataset used by the imbalance sweep.

Every feature of a group-A row is drawn from ``Normal(0, noise_sd)`` and every
feature of a group-B row from ``Normal(mean_shift, noise_sd)``.  Draws come
from a single ``numpy.random.default_rng(seed)`` stream in a fixed order:

    1. the whole group-A block, rows major / features minor;
    2. the whole group-B block, rows major / features minor.

Both blocks are drawn with one ``Generator.normal`` call each, which fills the
requested ``(rows, features)`` array in C order, so the same seed and
parameters reproduce bit-identical datasets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd

from .exceptions import InvalidParameter

__all__ = ["GROUPS", "Dataset", "synthesize", "build_pools"]

GROUPS = ("A", "B")


@dataclass(frozen=True)
class Dataset:
    """
    Labelled feature matrix.

    Rows ``[0, total_A)`` belong to group A and rows ``[total_A, total_A + total_B)``
    to group B.
    """

    features: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        if self.features.ndim != 2:
            raise InvalidParameter("features must be a 2D array.")
        if self.labels.shape != (self.features.shape[0],):
            raise InvalidParameter("labels must have one entry per feature row.")
        # Own copies, frozen; the caller's arrays stay untouched.
        for name in ("features", "labels"):
            arr = np.array(getattr(self, name), copy=True)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    @property
    def n_rows(self) -> int:
        return int(self.features.shape[0])

    @property
    def feature_count(self) -> int:
        return int(self.features.shape[1])

    def group_indices(self, group: str) -> np.ndarray:
        """Row indices of ``group`` in ascending order."""
        if group not in GROUPS:
            raise InvalidParameter(f"Unknown group {group!r}; expected one of {GROUPS}.")
        return np.flatnonzero(self.labels == group)

    def group_count(self, group: str) -> int:
        return int(self.group_indices(group).size)

    def to_frame(self, feature_prefix: str = "V") -> pd.DataFrame:
        """Return the dataset as a DataFrame with columns ``V1..VF`` and ``group``."""
        cols = [f"{feature_prefix}{i + 1}" for i in range(self.feature_count)]
        df = pd.DataFrame(np.array(self.features), columns=cols)
        df["group"] = np.array(self.labels)
        return df


def _check_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or int(value) != value or int(value) <= 0:
        raise InvalidParameter(f"{name} must be a positive integer (got {value!r}).")
    return int(value)


def synthesize(
    seed: int,
    total_A: int,
    total_B: int,
    feature_count: int,
    mean_shift: float,
    noise_sd: float,
) -> Dataset:
    """
    Draw the two-group dataset.

    Parameters
    ----------
    seed :
        Seed of the ``numpy.random.default_rng`` stream.
    total_A, total_B :
        Number of rows in each group (must be positive).
    feature_count :
        Number of real-valued features per row (must be positive).
    mean_shift :
        Mean of every group-B feature; group A is centred on 0.
    noise_sd :
        Standard deviation shared by both groups (must be non-negative; 0 gives
        constant features).
    """
    total_A = _check_positive("total_A", total_A)
    total_B = _check_positive("total_B", total_B)
    feature_count = _check_positive("feature_count", feature_count)
    noise_sd = float(noise_sd)
    if not np.isfinite(noise_sd) or noise_sd < 0.0:
        raise InvalidParameter(f"noise_sd must be a non-negative finite number (got {noise_sd!r}).")
    mean_shift = float(mean_shift)
    if not np.isfinite(mean_shift):
        raise InvalidParameter(f"mean_shift must be finite (got {mean_shift!r}).")

    rng = np.random.default_rng(int(seed))
    block_a = rng.normal(0.0, noise_sd, size=(total_A, feature_count))
    block_b = rng.normal(mean_shift, noise_sd, size=(total_B, feature_count))

    features = np.vstack((block_a, block_b))
    labels = np.array(["A"] * total_A + ["B"] * total_B, dtype="<U1")
    return Dataset(features=features, labels=labels)


def build_pools(
    dataset: Dataset,
    subset_start: int = 0,
    subset_stop: Optional[int] = None,
) -> Dict[str, np.ndarray]:
    """
    Split the working subset ``[subset_start, subset_stop)`` into per-group index pools.

    Each pool keeps the dataset's row order; it is the ordered candidate
    sequence the sampler truncates to the planned pool size.
    """
    stop = dataset.n_rows if subset_stop is None else int(subset_stop)
    start = int(subset_start)
    if start < 0 or stop > dataset.n_rows or start >= stop:
        raise InvalidParameter(
            f"Working subset [{start}, {stop}) is not a non-empty range inside [0, {dataset.n_rows})."
        )
    rows = np.arange(start, stop)
    labels = dataset.labels[start:stop]
    pools = {}
    for group in GROUPS:
        pool = rows[labels == group]
        pool.setflags(write=False)
        pools[group] = pool
    return pools

