# Benchmark Objective Functions for the Optimizer
# Author: Shengning Wang

import numpy as np
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple


class BenchmarkFunctions:
    """Single-objective test functions. Each maps x of shape (D,) to a float."""

    @staticmethod
    def sphere(x: np.ndarray) -> float:
        """
        Sphere Function (any D). Minimum 0 at the origin.
        """
        return float(np.sum(x ** 2))

    @staticmethod
    def rosenbrock(x: np.ndarray) -> float:
        """
        Rosenbrock Function (D >= 2). Minimum 0 at (1, ..., 1).
        """
        return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))

    @staticmethod
    def rastrigin(x: np.ndarray) -> float:
        """
        Rastrigin Function (any D). Minimum 0 at the origin.
        """
        return float(10.0 * x.size + np.sum(x ** 2 - 10.0 * np.cos(2 * np.pi * x)))

    @staticmethod
    def ackley(x: np.ndarray) -> float:
        """
        Ackley Function (any D). Minimum 0 at the origin.
        """
        n = x.size
        term1 = -20.0 * np.exp(-0.2 * np.sqrt(np.sum(x ** 2) / n))
        term2 = -np.exp(np.sum(np.cos(2 * np.pi * x)) / n)
        return float(term1 + term2 + 20.0 + np.e)

    @staticmethod
    def griewank(x: np.ndarray) -> float:
        """
        Griewank Function (any D). Minimum 0 at the origin.
        """
        i = np.arange(1, x.size + 1)
        return float(1.0 + np.sum(x ** 2) / 4000.0 - np.prod(np.cos(x / np.sqrt(i))))

    @staticmethod
    def branin(x: np.ndarray) -> float:
        """
        Branin Function (2D). Minimum ~0.397887 at three points.
        """
        x1, x2 = x[0], x[1]
        a, b, c, r, s, t = 1, 5.1 / (4 * np.pi**2), 5 / np.pi, 6, 10, 1 / (8 * np.pi)
        return float(a * (x2 - b * x1**2 + c * x1 - r)**2 + s * (1 - t) * np.cos(x1) + s)

    @staticmethod
    def six_hump_camel(x: np.ndarray) -> float:
        """
        Six-Hump Camel Function (2D). Minimum ~-1.0316 at (+-0.0898, -+0.7126).
        """
        x1, x2 = x[0], x[1]
        term1 = (4 - 2.1 * x1**2 + (x1**4) / 3) * x1**2
        term2 = x1 * x2
        term3 = (-4 + 4 * x2**2) * x2**2
        return float(term1 + term2 + term3)


@dataclass(frozen=True)
class Benchmark:
    """
    Registered objective with its search box.

    Attributes:
        name (str): Registry key.
        func (Callable[[np.ndarray], float]): The objective.
        bound (Tuple[float, float]): Default (min, max) applied to every dimension
            when ``box`` is None.
        n_dim (Optional[int]): Fixed dimension, or None when any D >= min_dim works.
        box (Optional[Tuple[Tuple[float, float], ...]]): Per-dimension bounds of fixed-D functions.
        optimum (float): Known global minimum.
        min_dim (int): Smallest admissible D.
    """

    name: str
    func: Callable[[np.ndarray], float]
    bound: Tuple[float, float]
    n_dim: Optional[int] = None
    box: Optional[Tuple[Tuple[float, float], ...]] = None
    optimum: float = 0.0
    min_dim: int = 1

    def __call__(self, x: np.ndarray) -> float:
        return self.func(x)

    def bounds(self, n_dim: Optional[int] = None) -> List[Tuple[float, float]]:
        """
        Search box as (min, max) pairs.

        Args:
            n_dim (Optional[int]): Requested dimension; ignored by fixed-D functions.

        Returns:
            List[Tuple[float, float]]: One pair per dimension.

        Raises:
            ValueError: If a free-dimension function gets no or too small a dimension.
        """
        if self.box is not None:
            return list(self.box)
        if n_dim is None or n_dim < self.min_dim:
            raise ValueError(f"{self.name} needs n_dim >= {self.min_dim}, got {n_dim}")
        return [self.bound] * n_dim

    def with_dimension(self, n_dim: int) -> "Benchmark":
        """Copy of a free-dimension benchmark pinned to ``n_dim`` (enables the dimension check)."""
        if self.box is not None:
            return self
        return Benchmark(self.name, self.func, self.bound, n_dim, None, self.optimum, self.min_dim)


BENCHMARKS: Dict[str, Benchmark] = {
    "sphere": Benchmark("sphere", BenchmarkFunctions.sphere, (-5.0, 5.0)),
    "rosenbrock": Benchmark("rosenbrock", BenchmarkFunctions.rosenbrock, (-2.048, 2.048), min_dim=2),
    "rastrigin": Benchmark("rastrigin", BenchmarkFunctions.rastrigin, (-5.12, 5.12)),
    "ackley": Benchmark("ackley", BenchmarkFunctions.ackley, (-32.768, 32.768)),
    "griewank": Benchmark("griewank", BenchmarkFunctions.griewank, (-600.0, 600.0)),
    "branin": Benchmark("branin", BenchmarkFunctions.branin, (-5.0, 15.0), n_dim=2,
                        box=((-5.0, 10.0), (0.0, 15.0)), optimum=0.397887),
    "six_hump_camel": Benchmark("six_hump_camel", BenchmarkFunctions.six_hump_camel, (-3.0, 3.0), n_dim=2,
                                box=((-3.0, 3.0), (-2.0, 2.0)), optimum=-1.0316),
}


def get_benchmark(name: str) -> Benchmark:
    """
    Looks up a benchmark by case-insensitive name.

    Raises:
        KeyError: If the name is not registered.
    """
    key = name.lower().replace("-", "_")
    if key not in BENCHMARKS:
        raise KeyError(f"unknown benchmark: '{name}'. available: {list(BENCHMARKS.keys())}")
    return BENCHMARKS[key]
