# Reproducibility utilities for optimization runs
# Author: Shengning Wang

import random
from typing import Optional, Union

import numpy as np

from diffevo.utils.hue_logger import hue, logger


SeedLike = Optional[Union[int, np.random.Generator]]


def seed_everything(seed: int = 42) -> None:
    """
    Sets the global seeds of python `random` and the legacy numpy state.

    The optimizer and the LHS design draw only from a per-run Generator (see
    make_rng), so this does not affect them. It pins user code that still relies on
    the global state, such as objectives that call np.random themselves.

    Args:
        seed (int): The seed value.
    """
    random.seed(seed)
    np.random.seed(seed)

    logger.info(f"global seed set to {hue.m}{seed}{hue.q}")


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """
    Returns a numpy Generator for a run.

    Args:
        seed (SeedLike): None for a non-deterministic source, an int seed, or an
            existing Generator which is returned unchanged.

    Returns:
        np.random.Generator: The random source owned by one optimization run.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)
