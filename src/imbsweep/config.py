"""Sweep configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .classifiers import CLASSIFIERS
from .exceptions import ConfigOutOfRange, InvalidParameter
from .windows import plan_sweep

__all__ = ["SweepConfig"]


@dataclass
class SweepConfig:
    """
    Every option of an imbalance sweep.

    The defaults reproduce the reference scenario: 2000 + 2000 rows, a working
    subset of the last 500 A rows plus all B rows, 91 windows stepping the
    pools by 5 rows and 10 iterations per window.
    """

    total_A: int = 2000
    total_B: int = 2000
    feature_count: int = 10
    mean_shift: float = 0.1
    noise_sd: float = 1.0
    seed: int = 1234
    initial_pool_size: int = 500
    step_size: int = 5
    num_configs: int = 91
    iterations_per_config: int = 10
    initial_test_size: int = 100
    subset_start: Optional[int] = None
    subset_stop: Optional[int] = None
    classifier: str = "logistic"
    threshold: float = 0.5
    n_jobs: Optional[int] = 1
    parallel_seeding: bool = False
    verbose: bool = True

    # ------------------------------------------------------------------ #
    # Construction helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "SweepConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidParameter(f"Unknown configuration option(s): {unknown}")
        return cls(**dict(values))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        return self.to_dict()

    def set_params(self, **params) -> "SweepConfig":
        for key, value in params.items():
            if not hasattr(self, key):
                raise InvalidParameter(f"Unknown parameter '{key}'.")
            setattr(self, key, value)
        return self

    # ------------------------------------------------------------------ #
    # Derived values
    # ------------------------------------------------------------------ #

    def resolved_subset(self) -> Tuple[int, int]:
        """Working subset ``[start, stop)``; by default the last pool of A rows plus all B rows."""
        start = self.total_A - self.initial_pool_size if self.subset_start is None else self.subset_start
        stop = self.total_A + self.total_B if self.subset_stop is None else self.subset_stop
        return int(start), int(stop)

    @property
    def uses_pair_seeding(self) -> bool:
        return bool(self.parallel_seeding) or self.n_jobs != 1

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def validate(self) -> "SweepConfig":
        """Check every option and the whole window plan; raise before any sampling."""
        for name in ("total_A", "total_B", "feature_count", "initial_pool_size",
                     "num_configs", "iterations_per_config"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidParameter(f"{name} must be a positive integer (got {value!r}).")
        for name in ("step_size", "initial_test_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidParameter(f"{name} must be a non-negative integer (got {value!r}).")
        noise_sd = float(self.noise_sd)
        if not np.isfinite(noise_sd) or noise_sd < 0.0:
            raise InvalidParameter(f"noise_sd must be a non-negative finite number (got {self.noise_sd!r}).")
        if not 0.0 <= float(self.threshold) <= 1.0:
            raise InvalidParameter(f"threshold must lie in [0, 1] (got {self.threshold!r}).")
        if self.n_jobs is not None and (not isinstance(self.n_jobs, int) or self.n_jobs == 0):
            raise InvalidParameter(f"n_jobs must be a non-zero integer or None (got {self.n_jobs!r}).")
        if str(self.classifier).lower() not in CLASSIFIERS:
            raise InvalidParameter(
                f"Unknown classifier {self.classifier!r}; expected one of {sorted(CLASSIFIERS)}."
            )

        plan_sweep(self.num_configs, self.initial_pool_size, self.step_size, self.initial_test_size)

        start, stop = self.resolved_subset()
        n_rows = self.total_A + self.total_B
        if start < 0 or stop > n_rows or start >= stop:
            raise InvalidParameter(f"Working subset [{start}, {stop}) is outside [0, {n_rows}).")
        rows_a = max(0, min(stop, self.total_A) - start)
        rows_b = max(0, stop - max(start, self.total_A))
        last = self.num_configs - 1
        need_a = self.initial_pool_size
        need_b = self.initial_pool_size + last * self.step_size
        if rows_a < need_a:
            raise ConfigOutOfRange(
                f"working subset holds {rows_a} group A rows but the first window needs {need_a}",
                config_index=0,
            )
        if rows_b < need_b:
            raise ConfigOutOfRange(
                f"working subset holds {rows_b} group B rows but the last window needs {need_b}",
                config_index=last,
            )
        return self
