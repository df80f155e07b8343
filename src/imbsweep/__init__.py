"""
IMBSWEEP package
----------------

Synthetic-data benchmark of binary classifiers under a sliding class-imbalance
sweep: repeated holdout draws per window, confusion counts, rank AUC and
per-window aggregation.
"""

from __future__ import annotations

from ._version import __version__
from .classifiers import CLASSIFIERS, EstimatorClassifier, make_classifier_factory
from .config import SweepConfig
from .exceptions import (
    ConfigOutOfRange,
    FitError,
    ImbsweepError,
    InsufficientPool,
    InvalidParameter,
)
from .metrics import aggregate, derive_metrics, raw_table
from .runner import IterationResult, TrainEvalRunner, rank_auc
from .sampling import Partition, pair_generator, sample
from .synthesis import Dataset, build_pools, synthesize
from .sweep import SweepResult, run_sweep
from .windows import WindowConfig, plan, plan_sweep

__all__ = [
    "__version__",
    "CLASSIFIERS",
    "ConfigOutOfRange",
    "Dataset",
    "EstimatorClassifier",
    "FitError",
    "ImbsweepError",
    "InsufficientPool",
    "InvalidParameter",
    "IterationResult",
    "Partition",
    "SweepConfig",
    "SweepResult",
    "TrainEvalRunner",
    "WindowConfig",
    "aggregate",
    "build_pools",
    "derive_metrics",
    "make_classifier_factory",
    "pair_generator",
    "plan",
    "plan_sweep",
    "rank_auc",
    "raw_table",
    "run_sweep",
    "sample",
    "synthesize",
]
