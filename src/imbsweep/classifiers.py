"""
Binary probabilistic classifiers usable by the sweep.

The runner only relies on two methods:

    fit(features, labels)             labels are the strings "A" / "B"
    predict_probability(features)     probability of class "B" per row

Any object exposing them can be returned by a classifier factory.  The
adapters below wrap scikit-learn style estimators (``fit`` / ``predict_proba``).
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Protocol

import numpy as np
from sklearn.base import clone
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from xgboost import XGBClassifier

from .exceptions import InvalidParameter

__all__ = [
    "Classifier",
    "EstimatorClassifier",
    "CLASSIFIERS",
    "make_classifier_factory",
]

POSITIVE = "B"


class Classifier(Protocol):
    def fit(self, features: np.ndarray, labels: Iterable[str]) -> object:
        ...

    def predict_probability(self, features: np.ndarray) -> np.ndarray:
        ...


class EstimatorClassifier:
    """
    Adapter from a scikit-learn estimator to the sweep's classifier capability.

    Labels are encoded ``B -> 1`` and ``A -> 0``; column 1 of ``predict_proba``
    is returned as the probability of B.
    """

    def __init__(self, estimator) -> None:
        self.estimator = estimator

    def fit(self, features: np.ndarray, labels: Iterable[str]) -> "EstimatorClassifier":
        y = (np.asarray(list(labels)) == POSITIVE).astype(int)
        if np.unique(y).size < 2:
            raise ValueError("Training labels contain a single group; cannot fit a binary classifier.")
        self.estimator.fit(np.asarray(features, dtype=np.float64), y)
        return self

    def predict_probability(self, features: np.ndarray) -> np.ndarray:
        proba = self.estimator.predict_proba(np.asarray(features, dtype=np.float64))
        return np.asarray(proba[:, 1], dtype=np.float64)


def _logistic(random_state: Optional[int]):
    return Pipeline(
        [
            ("scaler", StandardScaler(with_mean=True, with_std=True)),
            ("lr", LogisticRegression(max_iter=2000, random_state=random_state)),
        ]
    )


def _xgboost(random_state: Optional[int]):
    return XGBClassifier(
        n_estimators=200,
        max_depth=3,
        learning_rate=0.1,
        subsample=1.0,
        eval_metric="logloss",
        n_jobs=1,
        random_state=0 if random_state is None else int(random_state),
    )


CLASSIFIERS: Dict[str, Callable[[Optional[int]], object]] = {
    "logistic": _logistic,
    "xgboost": _xgboost,
}


def make_classifier_factory(name: str = "logistic", random_state: Optional[int] = 42) -> Callable[[], EstimatorClassifier]:
    """
    Return a zero-argument factory building a fresh, identically seeded classifier.

    Parameters
    ----------
    name :
        Key of :data:`CLASSIFIERS` (``"logistic"`` or ``"xgboost"``).
    random_state :
        Seed passed to the underlying estimator.
    """
    key = str(name).lower()
    if key not in CLASSIFIERS:
        raise InvalidParameter(f"Unknown classifier {name!r}; expected one of {sorted(CLASSIFIERS)}.")
    template = CLASSIFIERS[key](random_state)

    def factory() -> EstimatorClassifier:
        return EstimatorClassifier(clone(template))

    return factory
