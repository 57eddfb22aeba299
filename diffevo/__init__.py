# diffevo/__init__.py
"""
DiffEvo: Differential Evolution for Box-Constrained Engineering Optimization.

DiffEvo provides a derivative-free, population-based minimizer for scalar objectives over
a box of real variables. It implements the classic Differential Evolution family with
eleven mutation/crossover strategies, greedy per-individual selection and clamp-to-box
boundary repair, behind a SciPy-style functional interface and a stateful optimizer class.

Key Features:
- Eleven Strategies: rand/1, rand/2, best/1, best/2 with binomial or exponential crossover,
  plus rand-to-best/1, current-to-best/1 and current-to-rand/1 with binomial crossover
- Exact Bookkeeping: N + N * G objective evaluations per run, tracked and reported
- Reproducible Runs: every random draw comes from one seedable numpy Generator per run
- Benchmark Registry: sphere, rosenbrock, rastrigin, ackley, griewank, branin, six-hump camel

System Architecture:
```
diffevo/
├── optimization/  # Strategies, donor sampler, configuration, run driver
├── sampling/      # Initial population designs (uniform, Latin hypercube)
├── benchmarks/    # Test objectives with default search boxes
├── apps/          # Command-line benchmark runner
└── utils/         # Colored logger and seeding helpers
```
"""

from .optimization import (
    DEError, DEConfigError, InsufficientDonorsError, UninitializedBestError,
    DEConfig, Strategy, DonorSampler,
    de_optimize, DifferentialEvolution
)

__version__ = "1.0.0"
__author__ = "Shengning Wang (王晟宁)"
__email__ = "snwang2023@163.com"
__description__ = "Differential Evolution for Box-Constrained Engineering Optimization"
__license__ = "MIT"


__all__ = [
    "DEError", "DEConfigError", "InsufficientDonorsError", "UninitializedBestError",
    "DEConfig", "Strategy", "DonorSampler",
    "de_optimize", "DifferentialEvolution",
]
