"""
Per-iteration metrics and per-configuration aggregation.

Precision and recall score the detection of group **A**:

    accuracy  = (AA + BB) / total
    precision = AA / (AA + BA)      share of predicted-A rows that are A
    recall    = AA / (AA + AB)      share of actual-A rows predicted A
    f1        = 2 * precision * recall / (precision + recall)

while ``auc_test`` ranks the probability of **B**.  Every zero denominator
gives NaN, and averaging keeps NaN, so degenerate configurations stay visible
in the aggregated table.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

import numpy as np
import pandas as pd

from ._math import _nan_mean, _nan_ratio
from .runner import IterationResult

__all__ = [
    "RAW_COLUMNS",
    "AGGREGATED_COLUMNS",
    "derive_metrics",
    "raw_table",
    "aggregate",
]

COUNT_COLUMNS = [
    "group_A_train",
    "group_B_train",
    "total_test_A",
    "total_test_B",
    "test_cm_A_A",
    "test_cm_A_B",
    "test_cm_B_A",
    "test_cm_B_B",
]
METRIC_COLUMNS = ["auc_test", "accuracy_test", "precision_test", "recall_test", "f1_score_test"]
RAW_COLUMNS = ["config_index", "iteration"] + COUNT_COLUMNS + METRIC_COLUMNS
AGGREGATED_COLUMNS = (
    ["config_index"] + COUNT_COLUMNS + METRIC_COLUMNS
    + ["Percent_A_to_all", "Percent_true_A", "Percent_true_B"]
)


def derive_metrics(result: IterationResult | Mapping[str, float]) -> Dict[str, float]:
    """Accuracy, precision, recall and F1 of one iteration (A is the positive class)."""
    row = result.as_dict() if isinstance(result, IterationResult) else result
    aa = row["test_cm_A_A"]
    ab = row["test_cm_A_B"]
    ba = row["test_cm_B_A"]
    bb = row["test_cm_B_B"]

    accuracy = _nan_ratio(aa + bb, aa + ab + ba + bb)
    precision = _nan_ratio(aa, aa + ba)
    recall = _nan_ratio(aa, aa + ab)
    # NaN precision or recall propagates into f1.
    f1 = _nan_ratio(2.0 * precision * recall, precision + recall)
    return {"accuracy": accuracy, "precision": precision, "recall": recall, "f1": f1}


def raw_table(results: Iterable[IterationResult]) -> pd.DataFrame:
    """RawResults: one row per iteration, derived metrics included."""
    rows: List[Dict[str, float]] = []
    for res in results:
        row = res.as_dict()
        m = derive_metrics(res)
        row["accuracy_test"] = m["accuracy"]
        row["precision_test"] = m["precision"]
        row["recall_test"] = m["recall"]
        row["f1_score_test"] = m["f1"]
        rows.append(row)
    return pd.DataFrame(rows, columns=RAW_COLUMNS)


def aggregate(results: Iterable[IterationResult] | pd.DataFrame) -> pd.DataFrame:
    """
    AggregatedResults: mean of every numeric column per realized ``group_A_train``.

    Groups keep their first-appearance order (configuration order).  Means
    propagate NaN.  Composition percentages are computed from the averaged
    counts; the two detection rates are rounded to one decimal.
    """
    raw = results if isinstance(results, pd.DataFrame) else raw_table(results)
    if raw.empty:
        return pd.DataFrame(columns=AGGREGATED_COLUMNS)

    value_cols = [c for c in RAW_COLUMNS if c not in ("config_index", "iteration", "group_A_train")]
    grouped = raw.groupby("group_A_train", sort=False)
    agg = grouped[value_cols].agg(_nan_mean).reset_index()
    # Windows whose train counts coincide share a row, labelled by the first one.
    agg["config_index"] = grouped["config_index"].first().to_numpy().astype(int)

    a_all = agg["group_A_train"] + agg["total_test_A"]
    total = a_all + agg["group_B_train"] + agg["total_test_B"]
    with np.errstate(divide="ignore", invalid="ignore"):
        agg["Percent_A_to_all"] = 100.0 * a_all / total
        agg["Percent_true_A"] = np.round(100.0 * agg["test_cm_A_A"] / agg["total_test_A"], 1)
        agg["Percent_true_B"] = np.round(100.0 * agg["test_cm_B_B"] / agg["total_test_B"], 1)

    return agg[AGGREGATED_COLUMNS]
