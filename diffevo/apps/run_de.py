# Differential Evolution Benchmark Runner
# Author: Shengning Wang

import os
import json
from typing import Any, Dict, Optional, Sequence

from scipy.optimize import OptimizeResult

from diffevo.apps.args import get_args
from diffevo.benchmarks import get_benchmark
from diffevo.optimization import DEConfig, run_differential_evolution
from diffevo.utils import hue, logger, make_rng, seed_everything


def summarize(result: OptimizeResult, config: DEConfig, function: str, bounds: list) -> Dict[str, Any]:
    """
    JSON-serializable summary of one run.

    Args:
    - result (OptimizeResult): Result returned by the optimizer
    - config (DEConfig): Settings of the run
    - function (str): Benchmark name
    - bounds (list): (min, max) pairs of the run

    Returns:
    - Dict[str, Any]: Summary with best point, fitness, counters and settings
    """
    return {
        "function": function,
        "bounds": [list(b) for b in bounds],
        "config": config.to_dict(),
        "x": None if result.x is None else result.x.tolist(),
        "fun": result.fun,
        "nfev": result.nfev,
        "nit": result.nit,
        "success": result.success,
        "message": result.message,
    }


def main(argv: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """
    Runs DE on a benchmark function and saves the summary to <output_dir>/<function>_<strategy>.json

    Args:
    - argv (Optional[Sequence[str]]): Command-line arguments; sys.argv[1:] when None

    Returns:
    - Dict[str, Any]: The saved summary
    """
    args = get_args(argv)
    seed_everything(args.seed)

    benchmark = get_benchmark(args.function)
    if args.bounds is not None:
        n_dim = benchmark.n_dim or args.dim
        bounds = [tuple(args.bounds)] * n_dim
    else:
        bounds = benchmark.bounds(args.dim)
    objective = benchmark.with_dimension(len(bounds))

    config = DEConfig(
        population_size=args.popsize,
        generations=args.generations,
        mutation=args.f,
        mutation2=args.f2,
        crossover_probability=args.cr,
        strategy=args.strategy,
        exclude_self=args.exclude_self,
    )

    logger.info(f"Optimizing {hue.b}{benchmark.name}{hue.q} in {hue.m}{len(bounds)}{hue.q} dimensions...")
    result = run_differential_evolution(objective, bounds, config, rng=make_rng(args.seed), init=args.init,
                                        disp=args.disp, progress=args.progress)

    summary = summarize(result, config, benchmark.name, bounds)

    os.makedirs(args.output_dir, exist_ok=True)
    path = os.path.join(args.output_dir, f"{benchmark.name}_{config.strategy.name}.json")
    with open(path, "w") as f:
        json.dump(summary, f, indent=4)

    logger.info(f"{hue.g}Summary saved to {path}{hue.q} (known optimum {benchmark.optimum})")
    return summary


if __name__ == "__main__":
    main()
