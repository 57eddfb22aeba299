# Mutation and Crossover Strategies for Differential Evolution
# Author: Shengning Wang

"""Strategy table of the Differential Evolution optimizer.

Each strategy tag names one mutation formula and one crossover style. Mutation
formulas are pure functions registered in ``MUTATIONS`` and crossover styles in
``CROSSOVERS``; ``build_trial`` looks both up by tag, so exactly one handler runs
per individual update.

Notation (``population`` has shape (N, D)):
    x_p  current individual            x_rk  k-th donor from the shuffled buffer
    b    global best                   F, F2 mutation factors

    RAND_1_*             v = x_r1 + F (x_r2 - x_r3)
    RAND_2_*             v = x_r1 + F (x_r2 - x_r3 + x_r4 - x_r5)
    BEST_1_*             v = b + F (x_r1 - x_r2)
    BEST_2_*             v = b + F (x_r1 - x_r2 + x_r3 - x_r4)
    RAND_TO_BEST_BIN     v = x_r2 + F (x_r3 - x_r4) + F2 (b - x_r1)
    CURRENT_TO_BEST_BIN  v = x_p + F (x_r1 - x_r2) + F2 (b - x_p)
    CURRENT_TO_RAND_BIN  v = x_p + F (x_r2 - x_r3) + F2 (x_r1 - x_p)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Union

import numpy as np

from diffevo.optimization.errors import DEConfigError, InsufficientDonorsError, UninitializedBestError


# ---------------------------------------------------------------------------
# Strategy tags
# ---------------------------------------------------------------------------


class Strategy(str, Enum):
    """Closed set of mutation/crossover schemes, written as ``base/differences/crossover``."""

    RAND_1_BIN = "rand/1/bin"
    RAND_2_BIN = "rand/2/bin"
    RAND_1_EXP = "rand/1/exp"
    RAND_2_EXP = "rand/2/exp"
    BEST_1_BIN = "best/1/bin"
    BEST_2_BIN = "best/2/bin"
    BEST_1_EXP = "best/1/exp"
    BEST_2_EXP = "best/2/exp"
    RAND_TO_BEST_BIN = "rand-to-best/1/bin"
    CURRENT_TO_BEST_BIN = "current-to-best/1/bin"
    CURRENT_TO_RAND_BIN = "current-to-rand/1/bin"

    @property
    def mutation(self) -> str:
        """Mutation family key into ``MUTATIONS``."""
        return self.value.rsplit("/", 1)[0]

    @property
    def crossover(self) -> str:
        """Crossover key into ``CROSSOVERS``: "bin" or "exp"."""
        return self.value.rsplit("/", 1)[1]

    @property
    def donors(self) -> int:
        """Number of donor indices consumed from the shuffled buffer."""
        return DONOR_COUNTS[self.mutation]

    @property
    def needs_best(self) -> bool:
        """True when the mutant formula reads the global best."""
        return self.mutation in BEST_SEEKING

    @classmethod
    def parse(cls, tag: Union["Strategy", str]) -> "Strategy":
        """
        Resolves a strategy tag.

        Accepts a member, its name ("RAND_1_BIN"), its value ("rand/1/bin") or a
        compact spelling ("rand1bin"), all case-insensitive.

        Raises:
            DEConfigError: If the tag names no strategy.
        """
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str):
            raise DEConfigError(f"strategy must be a Strategy or str, got {type(tag).__name__}")

        key = _normalize(tag)
        for member in cls:
            if key in (_normalize(member.name), _normalize(member.value)):
                return member
        raise DEConfigError(f"unknown strategy: '{tag}'. available: {[m.name for m in cls]}")


def _normalize(tag: str) -> str:
    return re.sub(r"[^a-z0-9]", "", tag.lower())


DONOR_COUNTS: Dict[str, int] = {
    "rand/1": 3,
    "rand/2": 5,
    "best/1": 2,
    "best/2": 4,
    "rand-to-best/1": 4,
    "current-to-best/1": 2,
    "current-to-rand/1": 3,
}

BEST_SEEKING = frozenset({"best/1", "best/2", "rand-to-best/1", "current-to-best/1"})


# ---------------------------------------------------------------------------
# Mutation formulas
# ---------------------------------------------------------------------------

MutationFn = Callable[[np.ndarray, int, Sequence[int], Optional[np.ndarray], float, float], np.ndarray]


def _rand_1(pop, p, r, best, f, f2):
    return pop[r[0]] + f * (pop[r[1]] - pop[r[2]])


def _rand_2(pop, p, r, best, f, f2):
    return pop[r[0]] + f * (pop[r[1]] - pop[r[2]] + pop[r[3]] - pop[r[4]])


def _best_1(pop, p, r, best, f, f2):
    return best + f * (pop[r[0]] - pop[r[1]])


def _best_2(pop, p, r, best, f, f2):
    return best + f * (pop[r[0]] - pop[r[1]] + pop[r[2]] - pop[r[3]])


def _rand_to_best_1(pop, p, r, best, f, f2):
    return pop[r[1]] + f * (pop[r[2]] - pop[r[3]]) + f2 * (best - pop[r[0]])


def _current_to_best_1(pop, p, r, best, f, f2):
    return pop[p] + f * (pop[r[0]] - pop[r[1]]) + f2 * (best - pop[p])


def _current_to_rand_1(pop, p, r, best, f, f2):
    return pop[p] + f * (pop[r[1]] - pop[r[2]]) + f2 * (pop[r[0]] - pop[p])


MUTATIONS: Dict[str, MutationFn] = {
    "rand/1": _rand_1,
    "rand/2": _rand_2,
    "best/1": _best_1,
    "best/2": _best_2,
    "rand-to-best/1": _rand_to_best_1,
    "current-to-best/1": _current_to_best_1,
    "current-to-rand/1": _current_to_rand_1,
}


def mutate(strategy: Union[Strategy, str], population: np.ndarray, current: int, donors: Sequence[int],
           best: Optional[np.ndarray], f: float, f2: float) -> np.ndarray:
    """
    Builds the mutant vector of one individual.

    Args:
        strategy (Union[Strategy, str]): Strategy tag selecting the formula.
        population (np.ndarray): Current population. Shape: (N, D).
        current (int): Index of the individual being updated.
        donors (Sequence[int]): Donor indices, at least ``strategy.donors`` of them.
        best (Optional[np.ndarray]): Global best vector. Shape: (D,). May be None only
            for strategies that do not read it.
        f (float): Mutation factor F.
        f2 (float): Secondary mutation factor F2.

    Returns:
        np.ndarray: Fresh mutant vector. Shape: (D,).

    Raises:
        InsufficientDonorsError: If fewer donors than required are supplied.
        UninitializedBestError: If the formula reads the best and ``best`` is None.
    """
    strategy = Strategy.parse(strategy)
    if len(donors) < strategy.donors:
        raise InsufficientDonorsError(strategy.donors, len(donors))
    if strategy.needs_best and best is None:
        raise UninitializedBestError(f"{strategy.name} requires a global best before mutating")

    return np.asarray(MUTATIONS[strategy.mutation](population, current, donors, best, f, f2), dtype=float)


# ---------------------------------------------------------------------------
# Crossover
# ---------------------------------------------------------------------------

def binomial_crossover(parent: np.ndarray, mutant: np.ndarray, probability: float,
                       rng: np.random.Generator, forced: Optional[int] = None) -> np.ndarray:
    """
    Binomial crossover: each dimension takes the mutant value with probability ``probability``.

    The forced dimension always takes the mutant value, so the trial differs from the
    parent wherever the mutant does in that dimension.

    Args:
        parent (np.ndarray): Current individual. Shape: (D,).
        mutant (np.ndarray): Mutant vector. Shape: (D,).
        probability (float): Crossover probability in [0, 1].
        rng (np.random.Generator): Random source of the run.
        forced (Optional[int]): Forced dimension j*. Drawn uniformly from [0, D) when None.

    Returns:
        np.ndarray: Trial vector. Shape: (D,).
    """
    n_dim = parent.size
    if forced is None:
        forced = int(rng.integers(n_dim))

    take_mutant = rng.random(n_dim) <= probability
    take_mutant[forced] = True
    return np.where(take_mutant, mutant, parent)


def exponential_crossover(parent: np.ndarray, mutant: np.ndarray, probability: float,
                          rng: np.random.Generator, forced: Optional[int] = None) -> np.ndarray:
    """
    Exponential crossover: copies a contiguous (cyclic) run of mutant dimensions.

    Copying starts at the forced dimension and continues while a uniform draw stays
    at or below ``probability``, stopping after D dimensions.

    Args:
        parent (np.ndarray): Current individual. Shape: (D,).
        mutant (np.ndarray): Mutant vector. Shape: (D,).
        probability (float): Crossover probability in [0, 1].
        rng (np.random.Generator): Random source of the run.
        forced (Optional[int]): First copied dimension j*. Drawn uniformly from [0, D) when None.

    Returns:
        np.ndarray: Trial vector. Shape: (D,).
    """
    n_dim = parent.size
    if forced is None:
        forced = int(rng.integers(n_dim))

    trial = parent.copy()
    j = forced
    copied = 0
    while True:
        trial[j] = mutant[j]
        copied += 1
        j = (j + 1) % n_dim
        if copied >= n_dim or rng.random() > probability:
            break
    return trial


CrossoverFn = Callable[..., np.ndarray]

CROSSOVERS: Dict[str, CrossoverFn] = {
    "bin": binomial_crossover,
    "exp": exponential_crossover,
}


def build_trial(strategy: Union[Strategy, str], population: np.ndarray, current: int, donors: Sequence[int],
                best: Optional[np.ndarray], f: float, f2: float, probability: float,
                rng: np.random.Generator) -> np.ndarray:
    """
    Mutation followed by the strategy's crossover, before boundary repair.

    Returns:
        np.ndarray: Unrepaired trial vector. Shape: (D,).
    """
    strategy = Strategy.parse(strategy)
    mutant = mutate(strategy, population, current, donors, best, f, f2)
    return CROSSOVERS[strategy.crossover](population[current], mutant, probability, rng)
