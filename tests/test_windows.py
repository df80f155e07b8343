import pytest

from imbsweep.exceptions import ConfigOutOfRange
from imbsweep.windows import WindowConfig, plan, plan_sweep

SCENARIO = dict(total_configs=91, initial_pool_size=500, step_size=5, initial_test_size=100)


# Test 1
def test_first_window_is_balanced():
    cfg = plan(0, **SCENARIO)
    assert (cfg.group_A_pool_size, cfg.group_B_pool_size) == (500, 500)
    assert (cfg.group_A_train_size, cfg.group_B_train_size) == (400, 400)
    assert (cfg.group_A_test_size, cfg.group_B_test_size) == (100, 100)


# Test 2
def test_last_window_is_skewed():
    cfg = plan(90, **SCENARIO)
    assert (cfg.group_A_pool_size, cfg.group_B_pool_size) == (50, 950)
    assert (cfg.group_A_train_size, cfg.group_B_train_size) == (40, 760)
    assert (cfg.group_A_test_size, cfg.group_B_test_size) == (10, 190)


# Test 3
def test_pools_move_by_step_and_train_is_floor_of_80_percent():
    configs = plan_sweep(**SCENARIO)
    assert len(configs) == 91
    for prev, cur in zip(configs, configs[1:]):
        assert cur.group_A_pool_size == prev.group_A_pool_size - 5
        assert cur.group_B_pool_size == prev.group_B_pool_size + 5
        assert cur.group_A_test_size == prev.group_A_test_size - 1
        assert cur.group_B_test_size == prev.group_B_test_size + 1
    for cfg in configs:
        assert cfg.group_A_train_size == (cfg.group_A_pool_size * 4) // 5
        assert cfg.group_B_train_size == (cfg.group_B_pool_size * 4) // 5


# Test 4
def test_train_size_floor_on_non_multiples():
    cfg = plan(1, total_configs=2, initial_pool_size=13, step_size=1, initial_test_size=2)
    # A pool 12 -> floor(9.6) = 9; B pool 14 -> floor(11.2) = 11
    assert cfg.group_A_train_size == 9
    assert cfg.group_B_train_size == 11


# Test 5
def test_negative_pool_raises():
    with pytest.raises(ConfigOutOfRange) as info:
        plan(3, total_configs=4, initial_pool_size=10, step_size=5, initial_test_size=2)
    assert info.value.config_index == 3


# Test 6
def test_test_quota_larger_than_held_out_rows_raises():
    with pytest.raises(ConfigOutOfRange):
        plan(0, total_configs=1, initial_pool_size=10, step_size=0, initial_test_size=5)


# Test 7
def test_index_outside_sweep_raises():
    with pytest.raises(ConfigOutOfRange):
        plan(91, **SCENARIO)
    with pytest.raises(ConfigOutOfRange):
        plan(-1, **SCENARIO)


# Test 8
def test_group_accessors():
    cfg = plan(10, **SCENARIO)
    assert isinstance(cfg, WindowConfig)
    assert cfg.pool_size("A") == 450 and cfg.pool_size("B") == 550
    assert cfg.train_size("A") == 360 and cfg.train_size("B") == 440
    assert cfg.test_size("A") == 90 and cfg.test_size("B") == 110
    assert cfg.as_dict()["config_index"] == 10
