"""Differential Evolution (DE) with a closed table of eleven strategies.

This module implements the classic population-based DE minimiser of Storn and
Price for box-constrained real vectors:

    initialise N candidates uniformly in the box and evaluate them once;
    for each of G generations, for each individual p:
        shuffle the donor buffer, build a mutant from the strategy formula,
        cross it over with x_p, clamp the trial into the box, evaluate it,
        and replace x_p when the trial is strictly better.

Updates are applied immediately, so best-seeking strategies see a best that may
have improved earlier in the same generation.

Two entry points are provided:

* ``de_optimize`` mirrors the SciPy ``differential_evolution`` call style and
  returns a ``scipy.optimize.OptimizeResult``.
* ``DifferentialEvolution`` is a stateful facade with settable parameters and
  ``error`` / ``number_of_evaluations`` accessors for the last run.

Dependencies:
    numpy  >= 1.24
    scipy  >= 1.10
    tqdm
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import ArrayLike
from scipy.optimize import Bounds, OptimizeResult
from tqdm.auto import tqdm

from diffevo.optimization.config import DEConfig
from diffevo.optimization.errors import DEConfigError, UninitializedBestError
from diffevo.optimization.sampler import DonorSampler
from diffevo.optimization.strategies import Strategy, build_trial
from diffevo.sampling.doe import lhs_design, scale_design, uniform_design
from diffevo.utils.hue_logger import hue, logger
from diffevo.utils.seeder import SeedLike, make_rng


BoundsLike = Union[Bounds, Sequence[Tuple[float, float]], np.ndarray]
Objective = Callable[..., Any]


# ---------------------------------------------------------------------------
# Run containers
# ---------------------------------------------------------------------------


@dataclass
class Population:
    """Candidates and their index-aligned fitness values.

    Attributes:
        candidates: Candidate vectors. Shape: (N, D).
        fitness: Objective value of each candidate. Shape: (N,).
    """

    candidates: np.ndarray
    fitness: np.ndarray

    @property
    def size(self) -> int:
        return self.candidates.shape[0]

    @property
    def n_dim(self) -> int:
        return self.candidates.shape[1]


@dataclass
class RunState:
    """Mutable bookkeeping of a single run; never shared between runs.

    Attributes:
        best_x: Best vector found so far, or None before one is established.
        best_fun: Objective value of ``best_x``; ``+inf`` until established.
        nfev: Objective evaluations performed, initialisation included.
    """

    best_x: Optional[np.ndarray] = None
    best_fun: float = np.inf
    nfev: int = 0


@dataclass
class GenerationReport:
    """Snapshot handed to the per-generation callback.

    Attributes:
        generation: 1-based index of the generation just completed.
        best_x: Copy of the global best vector (None if not established).
        best_fun: Global best objective value.
        nfev: Evaluations so far.
        population: Copy of the candidates. Shape: (N, D).
        fitness: Copy of the fitness values. Shape: (N,).
    """

    generation: int
    best_x: Optional[np.ndarray]
    best_fun: float
    nfev: int
    population: np.ndarray = field(repr=False)
    fitness: np.ndarray = field(repr=False)


# ---------------------------------------------------------------------------
# Private helper functions
# ---------------------------------------------------------------------------


def _parse_bounds(bounds: BoundsLike) -> Tuple[np.ndarray, np.ndarray]:
    """Parse a SciPy ``Bounds`` object or a sequence of (min, max) pairs.

    Args:
        bounds: Box constraints, either a ``scipy.optimize.Bounds`` instance or an
            array-like of shape (n_dim, 2) whose rows are ``[min_i, max_i]``.

    Returns:
        Tuple ``(lower, upper)`` of 1-D float arrays, each of shape (n_dim,).

    Raises:
        DEConfigError: If the bounds are empty, have the wrong shape, contain
            non-finite values, or any min exceeds its max. ``min == max`` is
            accepted and pins that dimension.
    """
    if isinstance(bounds, Bounds):
        lower = np.atleast_1d(np.asarray(bounds.lb, dtype=float))
        upper = np.atleast_1d(np.asarray(bounds.ub, dtype=float))
    else:
        try:
            arr = np.asarray(bounds, dtype=float)
        except (TypeError, ValueError) as exc:
            raise DEConfigError(f"bounds must be numeric (min, max) pairs: {exc}") from exc
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise DEConfigError(f"bounds must have shape (n_dim, 2), got {arr.shape}")
        lower = arr[:, 0].copy()
        upper = arr[:, 1].copy()

    if lower.shape != upper.shape:
        raise DEConfigError("lower and upper bounds must have the same shape")
    if lower.size == 0:
        raise DEConfigError("bounds must describe at least one dimension")
    if np.any(~np.isfinite(lower)) or np.any(~np.isfinite(upper)):
        raise DEConfigError("all bounds must be finite")
    if np.any(lower > upper):
        bad = int(np.argmax(lower > upper))
        raise DEConfigError(f"bound {bad} has min {lower[bad]} > max {upper[bad]}")
    return lower, upper


def _evaluate(func: Objective, x: np.ndarray, args: Tuple[Any, ...]) -> float:
    """Evaluate ``func`` at ``x`` and coerce the result to a float.

    ``func`` receives a private copy of ``x``, so in-place edits never reach the
    population. Whatever ``func`` raises propagates unchanged.

    Raises:
        TypeError: If the objective returns None.
        ValueError: If the objective returns more than one value.
    """
    value = func(np.array(x, dtype=float, copy=True), *args)
    if value is None:
        raise TypeError("objective returned None instead of a scalar")
    raw = np.asarray(value, dtype=float)
    if raw.size != 1:
        raise ValueError(f"objective must return a scalar, got shape {raw.shape}")
    return float(raw.reshape(-1)[0])


def repair_bounds(trial: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """Clamp every component of ``trial`` into ``[lower_i, upper_i]``.

    Args:
        trial: Candidate vector. Shape: (n_dim,).
        lower: Lower bounds. Shape: (n_dim,).
        upper: Upper bounds. Shape: (n_dim,).

    Returns:
        New clamped vector. Shape: (n_dim,).
    """
    return np.clip(trial, lower, upper)


def initialize_population(
    func: Objective,
    lower: np.ndarray,
    upper: np.ndarray,
    size: int,
    rng: np.random.Generator,
    state: RunState,
    args: Tuple[Any, ...] = (),
    init: Union[str, ArrayLike] = "random",
) -> Population:
    """Sample ``size`` candidates inside the box and evaluate each exactly once.

    Args:
        func: Objective ``f(x, *args) -> scalar``.
        lower: Lower bounds. Shape: (n_dim,).
        upper: Upper bounds. Shape: (n_dim,).
        size: Population size N.
        rng: Random source of the run.
        state: Run bookkeeping; ``nfev`` grows by ``size``.
        args: Extra positional arguments for ``func``.
        init: ``"random"`` (uniform in [min, max)), ``"latinhypercube"``, or an
            array of shape (N, n_dim) that is clamped into the box.

    Returns:
        The evaluated initial population.

    Raises:
        DEConfigError: If ``init`` is an unknown string or an array of the wrong shape.
    """
    n_dim = lower.size
    if isinstance(init, str):
        kind = init.lower()
        if kind == "random":
            candidates = uniform_design(size, lower, upper, rng)
        elif kind == "latinhypercube":
            candidates = scale_design(lhs_design(size, n_dim, rng), lower, upper)
        else:
            raise DEConfigError(f"init must be 'random', 'latinhypercube' or an array, got '{init}'")
    else:
        candidates = np.array(init, dtype=float)
        if candidates.shape != (size, n_dim):
            raise DEConfigError(f"custom init must have shape ({size}, {n_dim}), got {candidates.shape}")
        candidates = np.clip(candidates, lower, upper)

    fitness = np.empty(size, dtype=float)
    for i in range(size):
        fitness[i] = _evaluate(func, candidates[i], args)
        state.nfev += 1

    return Population(candidates=candidates, fitness=fitness)


def _seed_best(population: Population, state: RunState) -> None:
    """Set the global best to the fittest initial candidate, ignoring NaN fitness."""
    if np.all(np.isnan(population.fitness)):
        return
    idx = int(np.nanargmin(population.fitness))
    state.best_x = population.candidates[idx].copy()
    state.best_fun = float(population.fitness[idx])


def greedy_select(population: Population, index: int, trial: np.ndarray, trial_fun: float,
                  state: RunState) -> bool:
    """Replace candidate ``index`` by ``trial`` if the trial is strictly better.

    An accepted trial that also beats the global best becomes the new best.
    Ties keep the parent.

    Returns:
        True if the trial was accepted.
    """
    if not trial_fun < population.fitness[index]:
        return False

    population.candidates[index] = trial
    population.fitness[index] = trial_fun
    if trial_fun < state.best_fun:
        state.best_x = trial.copy()
        state.best_fun = trial_fun
    return True


def _check_dimension(func: Objective, n_dim: int) -> None:
    """Compare the bounds length with an ``n_dim`` attribute declared by the objective."""
    declared = getattr(func, "n_dim", None)
    if declared is not None and int(declared) != n_dim:
        raise DEConfigError(f"objective expects {declared} dimensions but bounds describe {n_dim}")


# ---------------------------------------------------------------------------
# Run driver
# ---------------------------------------------------------------------------


def run_differential_evolution(
    func: Objective,
    bounds: BoundsLike,
    config: DEConfig,
    args: Tuple[Any, ...] = (),
    rng: Optional[np.random.Generator] = None,
    init: Union[str, ArrayLike] = "random",
    callback: Optional[Callable[[GenerationReport], Any]] = None,
    disp: bool = False,
    progress: bool = False,
) -> OptimizeResult:
    """Run one complete DE optimisation under an immutable ``config``.

    Every check that can fail without evaluating the objective runs first:
    bounds, declared dimension, donor availability and best-seeking strategies
    without a seeded best. After that, any exception raised by ``func`` aborts
    the run and propagates to the caller.

    Args:
        func: Objective ``f(x, *args) -> scalar``.
        bounds: Box constraints (see ``_parse_bounds``).
        config: Validated run settings.
        args: Extra positional arguments for ``func``.
        rng: Random source; a fresh non-deterministic Generator when None.
        init: Initial population scheme (see ``initialize_population``).
        callback: Called as ``callback(report)`` after every generation. Its
            return value is ignored; the run always completes G generations.
        disp: Log one line per generation.
        progress: Show a tqdm progress bar over generations.

    Returns:
        ``OptimizeResult`` with ``x``, ``fun``, ``nfev``, ``nit``, ``success``,
        ``message``, ``population``, ``population_energies``, ``strategy`` and
        ``optimizer``. ``x`` is None and ``success`` False when no best was ever
        established.

    Raises:
        DEConfigError: On invalid bounds, dimension mismatch or too few donors.
        UninitializedBestError: If a best-seeking strategy runs with ``seed_best=False``.

    Complexity:
        Time:  O(G * N * D) plus the cost of N + G * N objective calls
        Space: O(N * D)
    """
    lower, upper = _parse_bounds(bounds)
    n_dim = lower.size
    _check_dimension(func, n_dim)

    strategy: Strategy = config.strategy
    rng = make_rng(None) if rng is None else rng
    sampler = DonorSampler(config.population_size, rng, exclude_self=config.exclude_self)
    sampler.check(strategy.donors)

    if strategy.needs_best and not config.seed_best:
        raise UninitializedBestError(
            f"{strategy.name} reads the global best; enable seed_best to define it before generation 1"
        )

    f = float(config.mutation)
    f2 = float(config.resolved_mutation2)
    probability = float(config.crossover_probability)

    logger.info(
        f"DE {hue.b}{strategy.name}{hue.q}: N={hue.m}{config.population_size}{hue.q}, "
        f"G={hue.m}{config.generations}{hue.q}, D={hue.m}{n_dim}{hue.q}"
    )

    # ------------------------------------------------------------------
    # 1. Initialisation
    # ------------------------------------------------------------------
    state = RunState()
    population = initialize_population(func, lower, upper, config.population_size, rng, state, args, init)

    if config.seed_best:
        _seed_best(population, state)
        logger.debug(f"global best seeded from initial population: {state.best_fun:.6e}")

    if strategy.needs_best and state.best_x is None:
        raise UninitializedBestError("every initial candidate evaluated to NaN; no global best to seed")

    # ------------------------------------------------------------------
    # 2. Generations
    # ------------------------------------------------------------------
    generation = 0
    for generation in tqdm(range(1, config.generations + 1), desc=f"DE {strategy.name}",
                           leave=False, disable=not progress):
        for p in range(population.size):
            donors = sampler.sample(strategy.donors, p)
            trial = build_trial(strategy, population.candidates, p, donors, state.best_x,
                                f, f2, probability, rng)
            trial = repair_bounds(trial, lower, upper)

            trial_fun = _evaluate(func, trial, args)
            state.nfev += 1
            greedy_select(population, p, trial, trial_fun, state)

        if disp:
            logger.info(
                f"[DE] gen={generation:5d}  best={state.best_fun:.8e}  "
                f"mean={np.mean(population.fitness):.8e}"
            )

        if callback is not None:
            callback(GenerationReport(
                generation=generation,
                best_x=None if state.best_x is None else state.best_x.copy(),
                best_fun=state.best_fun,
                nfev=state.nfev,
                population=population.candidates.copy(),
                fitness=population.fitness.copy(),
            ))

    # ------------------------------------------------------------------
    # 3. Result
    # ------------------------------------------------------------------
    success = state.best_x is not None
    if success:
        message = f"Completed {generation} generations."
        logger.info(f"DE finished: best={hue.g}{state.best_fun:.6e}{hue.q}, nfev={hue.m}{state.nfev}{hue.q}")
    else:
        message = "No trial improved on +inf; no best vector was established."
        logger.warning(f"{hue.y}{message}{hue.q}")

    result = OptimizeResult()
    result.x = None if state.best_x is None else state.best_x.copy()
    result.fun = float(state.best_fun)
    result.success = success
    result.message = message
    result.nit = int(generation)
    result.nfev = int(state.nfev)
    result.population = population.candidates.copy()
    result.population_energies = population.fitness.copy()
    result.strategy = strategy.name
    result.optimizer = "DE"
    return result


# ---------------------------------------------------------------------------
# Public optimiser
# ---------------------------------------------------------------------------


def de_optimize(
    func: Objective,
    bounds: BoundsLike,
    args: Tuple[Any, ...] = (),
    popsize: int = 100,
    maxiter: int = 1000,
    mutation: float = 0.5,
    mutation2: Optional[float] = None,
    recombination: float = 0.85,
    strategy: Union[Strategy, str] = Strategy.RAND_1_BIN,
    seed: SeedLike = None,
    init: Union[str, ArrayLike] = "random",
    exclude_self: bool = False,
    seed_best: bool = True,
    callback: Optional[Callable[[GenerationReport], Any]] = None,
    disp: bool = False,
    progress: bool = False,
) -> OptimizeResult:
    """Minimise ``func`` over a box using Differential Evolution.

    Unlike SciPy, ``popsize`` is the absolute population size N and ``maxiter``
    is the exact number of generations; there is no convergence test or polishing.

    Args:
        func: Objective ``f(x, *args) -> scalar`` with ``x`` of shape (n_dim,).
            If it exposes an ``n_dim`` attribute, it must equal ``len(bounds)``.
        bounds: ``scipy.optimize.Bounds`` or (n_dim, 2) array-like of (min, max).
        args: Extra positional arguments forwarded verbatim to ``func``.
        popsize: Population size N. Must be >= 1; strategies need 2 to 5 donors.
        maxiter: Number of generations G. Must be >= 1.
        mutation: Mutation factor F.
        mutation2: Secondary factor F2 for rand-to-best and current-to-x
            strategies; defaults to ``mutation``.
        recombination: Crossover probability in [0, 1].
        strategy: ``Strategy`` member or tag such as ``"rand/1/bin"``.
        seed: Integer seed or ``np.random.Generator``. None is non-deterministic.
        init: ``"random"``, ``"latinhypercube"``, or an (N, n_dim) array whose
            row count overrides ``popsize``.
        exclude_self: Withhold the current individual from its own donors.
        seed_best: Seed the global best from the fittest initial candidate.
        callback: ``callback(report)`` after every generation; return value ignored.
        disp: Log per-generation progress.
        progress: Show a tqdm progress bar.

    Returns:
        ``scipy.optimize.OptimizeResult``; see ``run_differential_evolution``.

    Raises:
        DEConfigError: On invalid settings, detected before any evaluation.
        UninitializedBestError: Best-seeking strategy with ``seed_best=False``.
    """
    if not isinstance(init, str):
        popsize = int(np.shape(init)[0])

    config = DEConfig(
        population_size=popsize,
        generations=maxiter,
        mutation=mutation,
        mutation2=mutation2,
        crossover_probability=recombination,
        strategy=strategy,
        exclude_self=exclude_self,
        seed_best=seed_best,
    )
    return run_differential_evolution(
        func, bounds, config, args=args, rng=make_rng(seed), init=init,
        callback=callback, disp=disp, progress=progress,
    )


class DifferentialEvolution:
    """
    Stateful Differential Evolution optimizer.

    Parameters may be changed between runs through the properties; each call to
    ``compute`` snapshots them into a ``DEConfig``, so a run never observes a change.
    The random source is created once from ``seed`` and shared by successive runs
    of the same instance.

    Attributes:
        config (DEConfig): Settings used by the next run.
        result (Optional[OptimizeResult]): Result of the last run.
    """

    def __init__(
        self,
        population_size: int = 100,
        generations: int = 1000,
        f: float = 0.5,
        crossover_probability: float = 0.85,
        strategy: Union[Strategy, str] = Strategy.RAND_1_BIN,
        f2: Optional[float] = None,
        exclude_self: bool = False,
        seed_best: bool = True,
        seed: SeedLike = None,
    ):
        """
        Args:
            population_size (int): Population size N.
            generations (int): Number of generations G.
            f (float): Mutation factor F.
            crossover_probability (float): Crossover probability in [0, 1].
            strategy (Union[Strategy, str]): Mutation/crossover scheme.
            f2 (Optional[float]): Secondary factor F2; defaults to F.
            exclude_self (bool): Withhold the current index from its donors.
            seed_best (bool): Seed the global best from the initial population.
            seed (SeedLike): Integer seed or Generator for reproducible runs.
        """
        self.config = DEConfig(
            population_size=population_size,
            generations=generations,
            mutation=f,
            mutation2=f2,
            crossover_probability=crossover_probability,
            strategy=strategy,
            exclude_self=exclude_self,
            seed_best=seed_best,
        )
        self.rng = make_rng(seed)
        self.result: Optional[OptimizeResult] = None

    # ======================================================================
    # Parameters
    # ======================================================================

    @property
    def population_size(self) -> int:
        return self.config.population_size

    @population_size.setter
    def population_size(self, value: int) -> None:
        self.config = self.config.replace(population_size=value)

    @property
    def generations(self) -> int:
        return self.config.generations

    @generations.setter
    def generations(self, value: int) -> None:
        self.config = self.config.replace(generations=value)

    @property
    def f(self) -> float:
        """Mutation factor F."""
        return self.config.mutation

    @f.setter
    def f(self, value: float) -> None:
        self.config = self.config.replace(mutation=value)

    @property
    def f2(self) -> float:
        """Secondary mutation factor F2 (rand-to-best and current-to-x only)."""
        return self.config.resolved_mutation2

    @f2.setter
    def f2(self, value: Optional[float]) -> None:
        self.config = self.config.replace(mutation2=value)

    @property
    def crossover_probability(self) -> float:
        return self.config.crossover_probability

    @crossover_probability.setter
    def crossover_probability(self, value: float) -> None:
        self.config = self.config.replace(crossover_probability=value)

    @property
    def strategy(self) -> Strategy:
        return self.config.strategy

    @strategy.setter
    def strategy(self, value: Union[Strategy, str]) -> None:
        self.config = self.config.replace(strategy=value)

    # ======================================================================
    # Results
    # ======================================================================

    @property
    def error(self) -> float:
        """Best objective value of the last run; +inf before any run."""
        return np.inf if self.result is None else float(self.result.fun)

    @property
    def number_of_evaluations(self) -> int:
        """Objective evaluations of the last run, initialisation included."""
        return 0 if self.result is None else int(self.result.nfev)

    def compute(self, function: Objective, bound_constraint: BoundsLike,
                args: Tuple[Any, ...] = (), init: Union[str, ArrayLike] = "random",
                callback: Optional[Callable[[GenerationReport], Any]] = None,
                disp: bool = False, progress: bool = False) -> Optional[np.ndarray]:
        """
        Runs one optimisation and returns the best vector found.

        Args:
            function (Objective): Objective ``f(x, *args) -> scalar``.
            bound_constraint (BoundsLike): One (min, max) pair per dimension.
            args (Tuple[Any, ...]): Extra positional arguments for ``function``.
            init (Union[str, ArrayLike]): Initialisation scheme or explicit population.
            callback (Optional[Callable]): Called with a ``GenerationReport`` per generation.
            disp (bool): Log one line per generation.
            progress (bool): Show a tqdm bar over generations.

        Returns:
            Optional[np.ndarray]: Best vector, or None if no best was established.
        """
        self.result = run_differential_evolution(function, bound_constraint, self.config,
                                                 args=args, rng=self.rng, init=init,
                                                 callback=callback, disp=disp, progress=progress)
        return self.result.x
