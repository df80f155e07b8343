"""
Configuration x iteration training/evaluation loop.

For every configuration the runner plans the window, then for every iteration
it draws a partition, fits a fresh classifier on the training rows, scores the
test rows and records realized counts, the 2x2 confusion counts and the rank
AUC as one :class:`IterationResult`.

Two seeding modes are supported:

  * a ``numpy.random.Generator`` shared by every draw, consumed strictly in
    (config_index, iteration) order; only valid with ``n_jobs == 1``;
  * an integer seed, from which every pair gets its own generator
    (:func:`imbsweep.sampling.pair_generator`).  Pairs may then be evaluated
    in parallel with joblib and the output is identical for any ``n_jobs``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional, Sequence, Union

import numpy as np
from joblib import Parallel, delayed

from ._math import _rankdata_average
from .exceptions import FitError, InvalidParameter
from .sampling import pair_generator, sample
from .synthesis import Dataset
from .windows import WindowConfig, plan

__all__ = [
    "IterationResult",
    "TrainEvalRunner",
    "classify",
    "confusion_counts",
    "rank_auc",
]

_GROUP_INDEX = {"A": 0, "B": 1}


@dataclass(frozen=True)
class IterationResult:
    """
    One row of the raw results table.

    ``test_cm_X_Y`` is the number of test rows whose actual group is ``X`` and
    whose predicted group is ``Y``.
    """

    config_index: int
    iteration: int
    group_A_train: int
    group_B_train: int
    total_test_A: int
    total_test_B: int
    test_cm_A_A: int
    test_cm_A_B: int
    test_cm_B_A: int
    test_cm_B_B: int
    auc_test: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def classify(prob_b: np.ndarray, threshold: float = 0.5) -> np.ndarray:
    """Hard labels from probabilities of B; ``prob >= threshold`` is B."""
    prob_b = np.asarray(prob_b, dtype=np.float64)
    return np.where(prob_b >= float(threshold), "B", "A")


def confusion_counts(actual: Sequence[str], predicted: Sequence[str]) -> np.ndarray:
    """
    Dense 2x2 counts laid out ``counts[predicted, actual]`` with A=0, B=1.

    Missing combinations are simply zero.
    """
    act = np.array([_GROUP_INDEX[g] for g in actual], dtype=np.intp)
    pred = np.array([_GROUP_INDEX[g] for g in predicted], dtype=np.intp)
    counts = np.zeros((2, 2), dtype=np.int64)
    np.add.at(counts, (pred, act), 1)
    return counts


def rank_auc(is_positive: np.ndarray, scores: np.ndarray) -> float:
    """
    Mann-Whitney estimate of the ROC AUC.

    Returns exactly 0.5 when only one class is present, where the statistic is
    undefined.
    """
    y = np.asarray(is_positive, dtype=bool)
    scores = np.asarray(scores, dtype=np.float64)
    pos = int(np.sum(y))
    neg = int(y.size - pos)
    if pos == 0 or neg == 0:
        return 0.5
    ranks = _rankdata_average(scores)
    u = float(np.sum(ranks[y])) - pos * (pos + 1) / 2.0
    return float(u / (pos * neg))


def _evaluate_pair(
    dataset: Dataset,
    group_A_pool: Sequence[int],
    group_B_pool: Sequence[int],
    config: WindowConfig,
    iteration: int,
    classifier_factory: Callable[[], object],
    rng: np.random.Generator,
    threshold: float,
) -> IterationResult:
    part = sample(group_A_pool, group_B_pool, config, rng, iteration=iteration)
    train_idx = part.train_indices
    test_idx = part.test_indices
    X_train, y_train = dataset.features[train_idx], dataset.labels[train_idx]
    X_test, y_test = dataset.features[test_idx], dataset.labels[test_idx]

    k = config.config_index
    try:
        clf = classifier_factory()
        clf.fit(X_train, y_train)
    except Exception as exc:
        raise FitError("classifier failed during fit", k, iteration) from exc
    try:
        prob_b = np.asarray(clf.predict_probability(X_test), dtype=np.float64).ravel()
        if prob_b.shape != (len(test_idx),):
            raise ValueError(
                f"predict_probability returned {prob_b.shape[0]} scores for {len(test_idx)} rows"
            )
    except Exception as exc:
        raise FitError("classifier failed during scoring", k, iteration) from exc

    counts = confusion_counts(y_test, classify(prob_b, threshold))
    a, b = _GROUP_INDEX["A"], _GROUP_INDEX["B"]
    return IterationResult(
        config_index=k,
        iteration=int(iteration),
        group_A_train=int(part.train["A"].size),
        group_B_train=int(part.train["B"].size),
        total_test_A=int(part.test["A"].size),
        total_test_B=int(part.test["B"].size),
        test_cm_A_A=int(counts[a, a]),
        test_cm_A_B=int(counts[b, a]),
        test_cm_B_A=int(counts[a, b]),
        test_cm_B_B=int(counts[b, b]),
        auc_test=rank_auc(y_test == "B", prob_b),
    )


@dataclass
class TrainEvalRunner:
    """
    Sweep driver.

    Parameters
    ----------
    initial_pool_size, step_size, initial_test_size :
        Window parameters forwarded to :func:`imbsweep.windows.plan`.
    threshold :
        Probability of B at or above which a row is predicted B.
    n_jobs :
        joblib worker count; anything but 1 requires integer seeding.
    backend :
        joblib backend name (``None`` uses joblib's default).
    verbose :
        Print one progress line per configuration.
    """

    initial_pool_size: int
    step_size: int
    initial_test_size: int
    threshold: float = 0.5
    n_jobs: Optional[int] = 1
    backend: Optional[str] = None
    verbose: bool = False

    def run(
        self,
        dataset: Dataset,
        group_A_pool: Sequence[int],
        group_B_pool: Sequence[int],
        num_configs: int,
        iterations_per_config: int,
        classifier_factory: Callable[[], object],
        rng: Union[np.random.Generator, int],
    ) -> List[IterationResult]:
        num_configs = int(num_configs)
        iterations_per_config = int(iterations_per_config)
        if num_configs <= 0 or iterations_per_config <= 0:
            raise InvalidParameter("num_configs and iterations_per_config must be positive.")

        configs = [
            plan(k, num_configs, self.initial_pool_size, self.step_size, self.initial_test_size)
            for k in range(num_configs)
        ]

        if isinstance(rng, np.random.Generator):
            if self.n_jobs != 1:
                raise InvalidParameter(
                    "A shared Generator cannot be used with n_jobs != 1; pass an integer seed instead."
                )
            return self._run_shared(
                dataset, group_A_pool, group_B_pool, configs, iterations_per_config,
                classifier_factory, rng,
            )
        if isinstance(rng, (bool, float)) or not isinstance(rng, (int, np.integer)):
            raise InvalidParameter(f"rng must be a numpy Generator or an integer seed (got {rng!r}).")
        return self._run_seeded(
            dataset, group_A_pool, group_B_pool, configs, iterations_per_config,
            classifier_factory, int(rng),
        )

    def _progress(self, config: WindowConfig, total: int) -> None:
        if self.verbose:
            print(
                f"[sweep] config {config.config_index + 1}/{total}: "
                f"A pool={config.group_A_pool_size} test={config.group_A_test_size} | "
                f"B pool={config.group_B_pool_size} test={config.group_B_test_size}",
                flush=True,
            )

    def _run_shared(self, dataset, pool_a, pool_b, configs, iterations, factory, rng):
        results: List[IterationResult] = []
        for config in configs:
            self._progress(config, len(configs))
            for it in range(iterations):
                results.append(
                    _evaluate_pair(dataset, pool_a, pool_b, config, it, factory, rng, self.threshold)
                )
        return results

    def _run_seeded(self, dataset, pool_a, pool_b, configs, iterations, factory, seed):
        if self.n_jobs == 1:
            results = []
            for config in configs:
                self._progress(config, len(configs))
                for it in range(iterations):
                    gen = pair_generator(seed, config.config_index, it)
                    results.append(
                        _evaluate_pair(dataset, pool_a, pool_b, config, it, factory, gen, self.threshold)
                    )
            return results

        if self.verbose:
            print(
                f"[sweep] dispatching {len(configs) * iterations} runs to {self.n_jobs} workers",
                flush=True,
            )
        results = Parallel(n_jobs=self.n_jobs, backend=self.backend)(
            delayed(_evaluate_pair)(
                dataset, pool_a, pool_b, config, it, factory,
                pair_generator(seed, config.config_index, it), self.threshold,
            )
            for config in configs
            for it in range(iterations)
        )
        return sorted(results, key=lambda r: (r.config_index, r.iteration))
