"""Sliding window planner: per-configuration pool, train and test sizes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from fractions import Fraction
from typing import Dict, List

from ._math import _floor_fraction
from .exceptions import ConfigOutOfRange

__all__ = ["TRAIN_FRACTION", "WindowConfig", "plan", "plan_sweep"]

TRAIN_FRACTION = Fraction(4, 5)


@dataclass(frozen=True)
class WindowConfig:
    config_index: int
    group_A_pool_size: int
    group_B_pool_size: int
    group_A_train_size: int
    group_B_train_size: int
    group_A_test_size: int
    group_B_test_size: int

    def pool_size(self, group: str) -> int:
        return getattr(self, f"group_{group}_pool_size")

    def train_size(self, group: str) -> int:
        return getattr(self, f"group_{group}_train_size")

    def test_size(self, group: str) -> int:
        return getattr(self, f"group_{group}_test_size")

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def plan(
    config_index: int,
    total_configs: int,
    initial_pool_size: int,
    step_size: int,
    initial_test_size: int,
) -> WindowConfig:
    """
    Compute the window of configuration ``config_index`` (0-based).

    Group A's pool shrinks by ``step_size`` and its test quota by 1 per step;
    group B's grow by the same amounts.  Train sizes are
    ``floor(0.8 * pool_size)``, computed exactly.
    """
    k = int(config_index)
    if k < 0 or k >= int(total_configs):
        raise ConfigOutOfRange(
            f"config_index must lie in [0, {total_configs})", config_index=k
        )

    pool_a = int(initial_pool_size) - k * int(step_size)
    pool_b = int(initial_pool_size) + k * int(step_size)
    test_a = int(initial_test_size) - k
    test_b = int(initial_test_size) + k

    sizes = {"A": (pool_a, test_a), "B": (pool_b, test_b)}
    trains = {}
    for group, (pool, test) in sizes.items():
        if pool < 0 or test < 0:
            raise ConfigOutOfRange(
                f"group {group} window is negative (pool={pool}, test={test})",
                config_index=k,
            )
        train = _floor_fraction(pool, TRAIN_FRACTION)
        if test > pool - train:
            raise ConfigOutOfRange(
                f"group {group} test size {test} exceeds the {pool - train} held-out rows "
                f"of a pool of {pool}",
                config_index=k,
            )
        trains[group] = train

    return WindowConfig(
        config_index=k,
        group_A_pool_size=pool_a,
        group_B_pool_size=pool_b,
        group_A_train_size=trains["A"],
        group_B_train_size=trains["B"],
        group_A_test_size=test_a,
        group_B_test_size=test_b,
    )


def plan_sweep(
    total_configs: int,
    initial_pool_size: int,
    step_size: int,
    initial_test_size: int,
) -> List[WindowConfig]:
    """Plan every configuration up front so bad sweep bounds fail before sampling."""
    return [
        plan(k, total_configs, initial_pool_size, step_size, initial_test_size)
        for k in range(int(total_configs))
    ]
