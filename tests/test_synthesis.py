import numpy as np
import pytest

from imbsweep.exceptions import InvalidParameter
from imbsweep.synthesis import Dataset, build_pools, synthesize


# Test 1
def test_shapes_and_labels():
    ds = synthesize(7, total_A=30, total_B=50, feature_count=4, mean_shift=0.5, noise_sd=1.0)
    assert ds.features.shape == (80, 4)
    assert ds.group_count("A") == 30 and ds.group_count("B") == 50
    assert list(ds.group_indices("A")) == list(range(30))
    assert list(ds.group_indices("B")) == list(range(30, 80))


# Test 2
def test_same_seed_is_bit_identical():
    a = synthesize(99, 40, 40, 5, 0.1, 1.0)
    b = synthesize(99, 40, 40, 5, 0.1, 1.0)
    c = synthesize(100, 40, 40, 5, 0.1, 1.0)
    assert np.array_equal(a.features, b.features)
    assert np.array_equal(a.labels, b.labels)
    assert not np.array_equal(a.features, c.features)


# Test 3
def test_generation_order_is_a_block_then_b_block_rows_major():
    seed, n_a, n_b, f = 11, 6, 4, 3
    ds = synthesize(seed, n_a, n_b, f, mean_shift=2.0, noise_sd=1.0)
    z = np.random.default_rng(seed).standard_normal(n_a * f + n_b * f)
    assert np.array_equal(ds.features[:n_a], z[: n_a * f].reshape(n_a, f))
    assert np.allclose(ds.features[n_a:], 2.0 + z[n_a * f:].reshape(n_b, f), rtol=0, atol=1e-12)


# Test 4
def test_mean_shift_separates_groups():
    ds = synthesize(3, 2000, 2000, 2, mean_shift=1.0, noise_sd=0.5)
    mean_a = ds.features[ds.labels == "A"].mean()
    mean_b = ds.features[ds.labels == "B"].mean()
    assert abs(mean_a) < 0.05
    assert abs(mean_b - 1.0) < 0.05


# Test 5
@pytest.mark.parametrize(
    "kwargs",
    [
        dict(total_A=0),
        dict(total_B=-3),
        dict(feature_count=0),
        dict(noise_sd=-0.5),
        dict(noise_sd=float("nan")),
        dict(total_A=2.5),
    ],
)
def test_invalid_parameters_fail_fast(kwargs):
    params = dict(seed=1, total_A=10, total_B=10, feature_count=2, mean_shift=0.1, noise_sd=1.0)
    params.update(kwargs)
    with pytest.raises(InvalidParameter):
        synthesize(**params)


# Test 6
def test_dataset_is_read_only():
    ds = synthesize(1, 5, 5, 2, 0.1, 1.0)
    with pytest.raises(ValueError):
        ds.features[0, 0] = 1.0


# Test 7
def test_working_subset_pools():
    ds = synthesize(1, 2000, 2000, 2, 0.1, 1.0)
    pools = build_pools(ds, 1500, 4000)
    assert list(pools["A"]) == list(range(1500, 2000))
    assert list(pools["B"]) == list(range(2000, 4000))
    with pytest.raises(InvalidParameter):
        build_pools(ds, 3000, 2000)


# Test 8
def test_to_frame():
    ds = synthesize(1, 3, 2, 2, 0.1, 1.0)
    df = ds.to_frame()
    assert list(df.columns) == ["V1", "V2", "group"]
    assert list(df["group"]) == ["A", "A", "A", "B", "B"]


# Test 9
def test_zero_noise_gives_constant_groups():
    ds = synthesize(1, 5, 5, 2, mean_shift=0.5, noise_sd=0.0)
    assert (ds.features[:5] == 0.0).all()
    assert (ds.features[5:] == 0.5).all()


# Test 10
def test_dataset_leaves_caller_arrays_writable():
    features = np.zeros((3, 2))
    labels = np.array(["A", "B", "B"])
    ds = Dataset(features=features, labels=labels)
    features[0, 0] = 7.0
    labels[0] = "B"
    assert ds.features[0, 0] == 0.0, "dataset must hold its own copy"
    assert ds.labels[0] == "A"
    assert not ds.features.flags.writeable
