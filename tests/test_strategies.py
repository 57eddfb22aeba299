import typing as tp

import numpy as np
import pytest

from diffevo.optimization import strategies
from diffevo.optimization.errors import DEConfigError, InsufficientDonorsError, UninitializedBestError
from diffevo.optimization.strategies import (
    Strategy,
    binomial_crossover,
    build_trial,
    exponential_crossover,
    mutate,
)


POP = np.array(
    [[0.0, 0.0], [1.0, 2.0], [3.0, 5.0], [7.0, 11.0], [13.0, 17.0], [19.0, 23.0]]
)
BEST = np.array([100.0, 200.0])
F, F2 = 0.5, 0.25


@pytest.mark.parametrize(
    "tag,expected",
    [
        ("RAND_1_BIN", Strategy.RAND_1_BIN),
        ("rand/2/exp", Strategy.RAND_2_EXP),
        ("best1bin", Strategy.BEST_1_BIN),
        ("current_to_best_bin", Strategy.CURRENT_TO_BEST_BIN),
        ("Rand-To-Best/1/Bin", Strategy.RAND_TO_BEST_BIN),
        (Strategy.BEST_2_EXP, Strategy.BEST_2_EXP),
    ],
)
def test_parse(tag: tp.Any, expected: Strategy) -> None:
    assert Strategy.parse(tag) is expected


@pytest.mark.parametrize("tag", ["rand/3/bin", "", 12])
def test_parse_unknown(tag: tp.Any) -> None:
    with pytest.raises(DEConfigError):
        Strategy.parse(tag)


def test_strategy_table_is_complete() -> None:
    assert len(Strategy) == 11
    for strategy in Strategy:
        assert strategy.mutation in strategies.MUTATIONS
        assert strategy.crossover in strategies.CROSSOVERS
        assert 2 <= strategy.donors <= 5


@pytest.mark.parametrize(
    "strategy,donors,needs_best,crossover",
    [
        (Strategy.RAND_1_BIN, 3, False, "bin"),
        (Strategy.RAND_2_EXP, 5, False, "exp"),
        (Strategy.BEST_1_EXP, 2, True, "exp"),
        (Strategy.BEST_2_BIN, 4, True, "bin"),
        (Strategy.RAND_TO_BEST_BIN, 4, True, "bin"),
        (Strategy.CURRENT_TO_BEST_BIN, 2, True, "bin"),
        (Strategy.CURRENT_TO_RAND_BIN, 3, False, "bin"),
    ],
)
def test_strategy_properties(strategy: Strategy, donors: int, needs_best: bool, crossover: str) -> None:
    assert strategy.donors == donors
    assert strategy.needs_best is needs_best
    assert strategy.crossover == crossover


@pytest.mark.parametrize(
    "strategy,expected",
    [
        (Strategy.RAND_1_BIN, POP[1] + F * (POP[2] - POP[3])),
        (Strategy.RAND_1_EXP, POP[1] + F * (POP[2] - POP[3])),
        (Strategy.RAND_2_BIN, POP[1] + F * (POP[2] - POP[3] + POP[4] - POP[5])),
        (Strategy.BEST_1_BIN, BEST + F * (POP[1] - POP[2])),
        (Strategy.BEST_2_EXP, BEST + F * (POP[1] - POP[2] + POP[3] - POP[4])),
        (Strategy.RAND_TO_BEST_BIN, POP[2] + F * (POP[3] - POP[4]) + F2 * (BEST - POP[1])),
        (Strategy.CURRENT_TO_BEST_BIN, POP[0] + F * (POP[1] - POP[2]) + F2 * (BEST - POP[0])),
        (Strategy.CURRENT_TO_RAND_BIN, POP[0] + F * (POP[2] - POP[3]) + F2 * (POP[1] - POP[0])),
    ],
)
def test_mutant_formulas(strategy: Strategy, expected: np.ndarray) -> None:
    mutant = mutate(strategy, POP, 0, [1, 2, 3, 4, 5], BEST, F, F2)
    np.testing.assert_array_almost_equal(mutant, expected)


def test_rand_1_literal_values() -> None:
    # [1, 2] + 0.5 * ([3, 5] - [7, 11])
    mutant = mutate("rand/1/bin", POP, 0, [1, 2, 3], None, F, F2)
    np.testing.assert_array_equal(mutant, [-1.0, -1.0])


def test_mutate_does_not_alias_population() -> None:
    population = POP.copy()
    mutant = mutate(Strategy.CURRENT_TO_RAND_BIN, population, 2, [1, 3, 4], None, F, F2)
    mutant[:] = -1.0
    np.testing.assert_array_equal(population, POP)


def test_mutate_insufficient_donors() -> None:
    with pytest.raises(InsufficientDonorsError) as excinfo:
        mutate(Strategy.RAND_2_BIN, POP, 0, [1, 2, 3], None, F, F2)
    assert excinfo.value.required == 5
    assert excinfo.value.available == 3


@pytest.mark.parametrize("strategy", [s for s in Strategy if s.needs_best])
def test_best_seeking_requires_best(strategy: Strategy) -> None:
    with pytest.raises(UninitializedBestError):
        mutate(strategy, POP, 0, [1, 2, 3, 4, 5], None, F, F2)


def test_binomial_zero_probability_copies_forced_dimension_only() -> None:
    rng = np.random.default_rng(3)
    parent, mutant = np.zeros(5), np.ones(5)
    trial = binomial_crossover(parent, mutant, 0.0, rng, forced=2)
    np.testing.assert_array_equal(trial, [0.0, 0.0, 1.0, 0.0, 0.0])


def test_binomial_zero_probability_random_forced_dimension() -> None:
    rng = np.random.default_rng(4)
    parent, mutant = np.zeros(6), np.ones(6)
    for _ in range(50):
        trial = binomial_crossover(parent, mutant, 0.0, rng)
        assert trial.sum() == 1.0


def test_binomial_full_probability_takes_mutant() -> None:
    rng = np.random.default_rng(5)
    trial = binomial_crossover(np.zeros(4), np.arange(4.0), 1.0, rng)
    np.testing.assert_array_equal(trial, np.arange(4.0))


def test_exponential_zero_probability_copies_one_dimension() -> None:
    rng = np.random.default_rng(6)
    parent, mutant = np.zeros(7), np.ones(7)
    for _ in range(50):
        trial = exponential_crossover(parent, mutant, 0.0, rng)
        assert trial.sum() == 1.0
    trial = exponential_crossover(parent, mutant, 0.0, rng, forced=4)
    np.testing.assert_array_equal(trial, [0, 0, 0, 0, 1, 0, 0])


def test_exponential_full_probability_copies_everything() -> None:
    rng = np.random.default_rng(7)
    trial = exponential_crossover(np.zeros(5), np.arange(1.0, 6.0), 1.0, rng, forced=3)
    np.testing.assert_array_equal(trial, np.arange(1.0, 6.0))


def test_exponential_copies_contiguous_cyclic_run() -> None:
    rng = np.random.default_rng(8)
    n_dim = 8
    for _ in range(100):
        forced = int(rng.integers(n_dim))
        trial = exponential_crossover(np.zeros(n_dim), np.ones(n_dim), 0.6, rng, forced=forced)
        copied = int(trial.sum())
        expected = np.zeros(n_dim)
        expected[[(forced + k) % n_dim for k in range(copied)]] = 1.0
        np.testing.assert_array_equal(trial, expected)


def test_crossover_leaves_inputs_untouched() -> None:
    rng = np.random.default_rng(9)
    parent, mutant = np.zeros(3), np.ones(3)
    binomial_crossover(parent, mutant, 0.5, rng)
    exponential_crossover(parent, mutant, 0.5, rng)
    np.testing.assert_array_equal(parent, np.zeros(3))
    np.testing.assert_array_equal(mutant, np.ones(3))


@pytest.mark.parametrize("strategy", list(Strategy))
def test_exactly_one_handler_runs(strategy: Strategy, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: tp.List[str] = []

    def counting(key: str, handler: tp.Callable[..., np.ndarray]) -> tp.Callable[..., np.ndarray]:
        def wrapped(*args: tp.Any) -> np.ndarray:
            calls.append(key)
            return handler(*args)
        return wrapped

    for key, handler in list(strategies.MUTATIONS.items()):
        monkeypatch.setitem(strategies.MUTATIONS, key, counting(key, handler))

    rng = np.random.default_rng(10)
    trial = build_trial(strategy, POP, 0, [1, 2, 3, 4, 5], BEST, F, F2, 0.9, rng)
    assert calls == [strategy.mutation]
    assert trial.shape == (2,)
