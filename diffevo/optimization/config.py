# Run Configuration for Differential Evolution
# Author: Shengning Wang

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, asdict, replace as dc_replace
from typing import Any, Dict, Optional, Union

from diffevo.optimization.errors import DEConfigError
from diffevo.optimization.strategies import Strategy


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DEConfigError(f"{name} must be a real number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class DEConfig:
    """
    Immutable settings of one Differential Evolution run.

    Defaults: 100 individuals, 1000 generations, F = 0.5, crossover probability 0.85,
    strategy rand/1/bin, F2 equal to F.

    Attributes:
        population_size (int): Number of candidates N. Must be >= 1.
        generations (int): Number of full sweeps G over the population. Must be >= 1.
        mutation (float): Mutation factor F.
        mutation2 (Optional[float]): Secondary factor F2 of the rand-to-best and current-to-x
            strategies. None means "same as F".
        crossover_probability (float): Per-dimension crossover probability in [0, 1].
        strategy (Strategy): Mutation/crossover scheme.
        exclude_self (bool): Withhold the current index from its own donors.
        seed_best (bool): Seed the global best from the fittest initial candidate.
    """

    population_size: int = 100
    generations: int = 1000
    mutation: float = 0.5
    mutation2: Optional[float] = None
    crossover_probability: float = 0.85
    strategy: Union[Strategy, str] = Strategy.RAND_1_BIN
    exclude_self: bool = False
    seed_best: bool = True

    def __post_init__(self) -> None:
        # normalize string tags so that every config carries a Strategy member
        object.__setattr__(self, "strategy", Strategy.parse(self.strategy))
        self.validate()

    @property
    def resolved_mutation2(self) -> float:
        return self.mutation if self.mutation2 is None else self.mutation2

    def validate(self) -> None:
        """
        Raises:
            DEConfigError: On any setting that makes a run ill-defined.
        """
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, numbers.Integral):
            raise DEConfigError(f"population_size must be an int, got {self.population_size!r}")
        if self.population_size < 1:
            raise DEConfigError(f"population_size must be >= 1, got {self.population_size}")

        if isinstance(self.generations, bool) or not isinstance(self.generations, numbers.Integral):
            raise DEConfigError(f"generations must be an int, got {self.generations!r}")
        if self.generations < 1:
            raise DEConfigError(f"generations must be >= 1, got {self.generations}")

        for name, value in (("mutation", self.mutation), ("mutation2", self.resolved_mutation2)):
            if not math.isfinite(_as_float(name, value)):
                raise DEConfigError(f"{name} must be finite, got {value}")

        p = _as_float("crossover_probability", self.crossover_probability)
        if not 0.0 <= p <= 1.0:
            raise DEConfigError(f"crossover_probability must be in [0, 1], got {self.crossover_probability}")

    def replace(self, **changes: Any) -> "DEConfig":
        """Returns a validated copy with ``changes`` applied."""
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view, strategy written by name."""
        data = asdict(self)
        data["strategy"] = self.strategy.name
        data["mutation2"] = self.resolved_mutation2
        return data
