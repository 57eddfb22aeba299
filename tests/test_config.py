import dataclasses
import typing as tp

import pytest

from diffevo.optimization import DEConfig, DEConfigError, Strategy


def test_defaults() -> None:
    config = DEConfig()
    assert config.population_size == 100
    assert config.generations == 1000
    assert config.mutation == 0.5
    assert config.resolved_mutation2 == 0.5
    assert config.crossover_probability == 0.85
    assert config.strategy is Strategy.RAND_1_BIN
    assert not config.exclude_self
    assert config.seed_best


def test_string_strategy_is_normalized() -> None:
    assert DEConfig(strategy="current-to-rand/1/bin").strategy is Strategy.CURRENT_TO_RAND_BIN


def test_explicit_mutation2() -> None:
    assert DEConfig(mutation=0.8, mutation2=0.3).resolved_mutation2 == 0.3


@pytest.mark.parametrize(
    "changes",
    [
        dict(population_size=0),
        dict(population_size=-3),
        dict(population_size=2.5),
        dict(population_size=True),
        dict(generations=0),
        dict(crossover_probability=-0.01),
        dict(crossover_probability=1.01),
        dict(crossover_probability=float("nan")),
        dict(mutation=float("inf")),
        dict(mutation2=float("nan")),
        dict(mutation=None),
        dict(mutation="0.5"),
        dict(mutation2=True),
        dict(crossover_probability=None),
        dict(strategy="no/such/strategy"),
    ],
)
def test_invalid_settings(changes: tp.Dict[str, tp.Any]) -> None:
    with pytest.raises(DEConfigError):
        DEConfig(**changes)


@pytest.mark.parametrize("probability", [0.0, 1.0])
def test_probability_edges_are_valid(probability: float) -> None:
    assert DEConfig(crossover_probability=probability).crossover_probability == probability


def test_config_is_frozen() -> None:
    config = DEConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.generations = 5  # type: ignore


def test_replace_validates() -> None:
    config = DEConfig(population_size=10)
    assert config.replace(generations=7).generations == 7
    assert config.replace(generations=7).population_size == 10
    with pytest.raises(DEConfigError):
        config.replace(crossover_probability=2.0)


def test_to_dict() -> None:
    data = DEConfig(strategy=Strategy.BEST_2_EXP, mutation=0.7).to_dict()
    assert data["strategy"] == "BEST_2_EXP"
    assert data["mutation2"] == 0.7
    assert data["population_size"] == 100
