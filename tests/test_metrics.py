import math

import pandas as pd
import pytest

from imbsweep.metrics import AGGREGATED_COLUMNS, RAW_COLUMNS, aggregate, derive_metrics, raw_table
from imbsweep.runner import IterationResult


def _result(k, it, a_train, b_train, aa, ab, ba, bb, auc=0.7):
    return IterationResult(
        config_index=k,
        iteration=it,
        group_A_train=a_train,
        group_B_train=b_train,
        total_test_A=aa + ab,
        total_test_B=ba + bb,
        test_cm_A_A=aa,
        test_cm_A_B=ab,
        test_cm_B_A=ba,
        test_cm_B_B=bb,
        auc_test=auc,
    )


# Test 1
def test_derive_metrics_values():
    m = derive_metrics(_result(0, 0, 400, 400, aa=40, ab=10, ba=20, bb=30))
    assert m["accuracy"] == pytest.approx(0.7)
    assert m["precision"] == pytest.approx(40 / 60)
    assert m["recall"] == pytest.approx(40 / 50)
    p, r = 40 / 60, 40 / 50
    assert m["f1"] == pytest.approx(2 * p * r / (p + r))


# Test 2
def test_no_predicted_a_gives_nan_precision():
    m = derive_metrics(_result(0, 0, 400, 400, aa=0, ab=10, ba=0, bb=10))
    assert math.isnan(m["precision"])
    assert m["recall"] == 0.0
    assert math.isnan(m["f1"])
    assert m["accuracy"] == pytest.approx(0.5)


# Test 3
def test_derive_metrics_accepts_mappings():
    row = {"test_cm_A_A": 1, "test_cm_A_B": 1, "test_cm_B_A": 1, "test_cm_B_B": 1}
    assert derive_metrics(row)["accuracy"] == pytest.approx(0.5)


# Test 4
def test_raw_table_columns_and_rows():
    raw = raw_table([_result(0, 0, 400, 400, 40, 10, 20, 30), _result(0, 1, 400, 400, 30, 20, 10, 40)])
    assert list(raw.columns) == RAW_COLUMNS
    assert len(raw) == 2
    assert (raw["test_cm_A_A"] + raw["test_cm_A_B"] + raw["test_cm_B_A"] + raw["test_cm_B_B"]).tolist() == [100, 100]


# Test 5
def test_aggregate_means_per_train_count_in_config_order():
    results = [
        _result(0, 0, 400, 400, 40, 10, 20, 30, auc=0.6),
        _result(0, 1, 400, 400, 30, 20, 10, 40, auc=0.8),
        _result(1, 0, 396, 404, 20, 29, 10, 41, auc=0.7),
        _result(1, 1, 396, 404, 25, 24, 15, 36, auc=0.9),
    ]
    raw = raw_table(results)
    agg = aggregate(results)
    assert list(agg.columns) == AGGREGATED_COLUMNS
    assert agg["group_A_train"].tolist() == [400, 396]
    assert agg["config_index"].tolist() == [0, 1]
    for a_train in (400, 396):
        rows = raw[raw["group_A_train"] == a_train]
        got = agg[agg["group_A_train"] == a_train].iloc[0]
        assert got["accuracy_test"] == pytest.approx(rows["accuracy_test"].mean())
        assert got["auc_test"] == pytest.approx(rows["auc_test"].mean())


# Test 6
def test_aggregate_percentages():
    agg = aggregate([_result(0, 0, 400, 400, aa=33, ab=67, ba=20, bb=80)])
    row = agg.iloc[0]
    assert row["Percent_A_to_all"] == pytest.approx(100 * 500 / 1000)
    assert row["Percent_true_A"] == 33.0
    assert row["Percent_true_B"] == 80.0


# Test 7
def test_detection_rates_rounded_to_one_decimal():
    agg = aggregate([_result(0, 0, 40, 760, aa=1, ab=2, ba=5, bb=1)])
    assert agg.iloc[0]["Percent_true_A"] == 33.3
    assert agg.iloc[0]["Percent_true_B"] == 16.7


# Test 8
def test_nan_precision_survives_averaging():
    results = [
        _result(0, 0, 400, 400, aa=0, ab=10, ba=0, bb=10),
        _result(0, 1, 400, 400, aa=5, ab=5, ba=5, bb=5),
    ]
    agg = aggregate(results)
    assert math.isnan(agg.iloc[0]["precision_test"]), "NaN must propagate, not be skipped or zeroed"
    assert agg.iloc[0]["recall_test"] == pytest.approx(0.25)


# Test 9
def test_aggregate_accepts_raw_frame_and_empty_input():
    results = [_result(0, 0, 400, 400, 40, 10, 20, 30)]
    pd.testing.assert_frame_equal(aggregate(raw_table(results)), aggregate(results))
    empty = aggregate([])
    assert empty.empty and list(empty.columns) == AGGREGATED_COLUMNS
