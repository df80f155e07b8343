"""
Disjoint train/test partitions for one (configuration, iteration) pair.

Per group the sampler

  * truncates the group's ordered index pool to the planned pool size,
  * draws ``train_size`` indices uniformly without replacement,
  * takes as test set the first ``test_size`` remaining indices, in the pool's
    original order (the remainder is *not* re-shuffled).

Random draws happen in a fixed order: group A's train draw, then group B's.
The generator is mutated in place, so threading one ``Generator`` through a
sequence of calls reproduces the same partitions for the same seed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np

from .exceptions import InsufficientPool
from .windows import WindowConfig

__all__ = ["Partition", "sample", "pair_generator"]


@dataclass(frozen=True)
class Partition:
    """Train and test row indices, kept per group so realized counts can be reported."""

    train: Dict[str, np.ndarray]
    test: Dict[str, np.ndarray]

    @property
    def train_indices(self) -> np.ndarray:
        return np.concatenate((self.train["A"], self.train["B"]))

    @property
    def test_indices(self) -> np.ndarray:
        return np.concatenate((self.test["A"], self.test["B"]))


def _draw_group(
    group: str,
    pool: Sequence[int],
    config: WindowConfig,
    rng: np.random.Generator,
    iteration: Optional[int],
) -> tuple[np.ndarray, np.ndarray]:
    pool_arr = np.asarray(pool, dtype=np.int64)
    pool_size = config.pool_size(group)
    train_size = config.train_size(group)
    test_size = config.test_size(group)

    if pool_arr.size < pool_size:
        raise InsufficientPool(
            f"group {group} pool holds {pool_arr.size} rows but the window needs {pool_size}",
            config_index=config.config_index,
            iteration=iteration,
        )
    window = pool_arr[:pool_size]

    picked = rng.choice(pool_size, size=train_size, replace=False)
    held_out = np.ones(pool_size, dtype=bool)
    held_out[picked] = False
    remainder = window[held_out]
    if test_size > remainder.size:
        raise InsufficientPool(
            f"group {group} needs {test_size} test rows but only {remainder.size} remain "
            f"after drawing {train_size} for training",
            config_index=config.config_index,
            iteration=iteration,
        )
    return window[picked], remainder[:test_size]


def sample(
    group_A_pool: Sequence[int],
    group_B_pool: Sequence[int],
    config: WindowConfig,
    rng: np.random.Generator,
    *,
    iteration: Optional[int] = None,
) -> Partition:
    """
    Draw one partition honouring ``config``'s sizes.

    ``iteration`` is only used to label an :class:`InsufficientPool` error.
    """
    train_a, test_a = _draw_group("A", group_A_pool, config, rng, iteration)
    train_b, test_b = _draw_group("B", group_B_pool, config, rng, iteration)
    return Partition(train={"A": train_a, "B": train_b}, test={"A": test_a, "B": test_b})


def pair_generator(seed: int, config_index: int, iteration: int) -> np.random.Generator:
    """
    Independent generator for one (configuration, iteration) pair.

    The stream depends only on ``seed`` and the pair's indices, so results do
    not depend on the order or the process in which pairs are evaluated.
    """
    seq = np.random.SeedSequence(entropy=int(seed), spawn_key=(int(config_index), int(iteration)))
    return np.random.default_rng(seq)
