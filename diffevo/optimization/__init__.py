# diffevo/optimization/__init__.py
"""
diffevo.optimization: Differential Evolution optimizer.
Includes:
    Error Taxonomy (errors.py),
    Run Configuration (config.py),
    Strategy Table (strategies.py),
    Donor Index Sampler (sampler.py),
    Optimizer and Run Driver (differential_evolution.py),
"""

# Hoist from errors (Error Taxonomy)
from .errors import DEError, DEConfigError, InsufficientDonorsError, UninitializedBestError

# Hoist from config (Run Configuration)
from .config import DEConfig

# Hoist from strategies (Strategy Table)
from .strategies import (
    Strategy, MUTATIONS, CROSSOVERS,
    mutate, binomial_crossover, exponential_crossover, build_trial
)

# Hoist from sampler (Donor Index Sampler)
from .sampler import DonorSampler

# Hoist from differential_evolution (Optimizer and Run Driver)
from .differential_evolution import (
    Population, RunState, GenerationReport,
    repair_bounds, initialize_population, greedy_select,
    run_differential_evolution, de_optimize, DifferentialEvolution
)


__all__ = [
    # Error Taxonomy
    "DEError", "DEConfigError", "InsufficientDonorsError", "UninitializedBestError",

    # Run Configuration
    "DEConfig",

    # Strategy Table
    "Strategy", "MUTATIONS", "CROSSOVERS",
    "mutate", "binomial_crossover", "exponential_crossover", "build_trial",

    # Donor Index Sampler
    "DonorSampler",

    # Optimizer and Run Driver
    "Population", "RunState", "GenerationReport",
    "repair_bounds", "initialize_population", "greedy_select",
    "run_differential_evolution", "de_optimize", "DifferentialEvolution",
]
