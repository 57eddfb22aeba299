# Differential Evolution Strategy Benchmark
# Author: Shengning Wang

import os
import sys
import json
import numpy as np
from tqdm.auto import tqdm
from scipy.optimize import differential_evolution
from typing import Dict, List


project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path: sys.path.insert(0, project_root)


from diffevo.benchmarks import BENCHMARKS
from diffevo.optimization import Strategy, de_optimize
from diffevo.utils.seeder import seed_everything
from diffevo.utils.hue_logger import hue, logger


def bench_strategies(functions: List[str], n_dim: int, popsize: int, maxiter: int,
                     repeats: int) -> Dict[str, Dict[str, Dict[str, float]]]:
    """
    Runs every strategy on every function and averages the best fitness over repeated seeds.

    Args:
        functions (List[str]): Benchmark names.
        n_dim (int): Dimension of free-dimension benchmarks.
        popsize (int): Population size N.
        maxiter (int): Generations G.
        repeats (int): Seeds per (function, strategy) pair.

    Returns:
        Dict[str, Dict[str, Dict[str, float]]]: function -> strategy -> {"mean", "std", "nfev"}.
    """
    results: Dict[str, Dict[str, Dict[str, float]]] = {}

    for name in functions:
        benchmark = BENCHMARKS[name]
        bounds = benchmark.bounds(n_dim)
        logger.info(f"Benchmarking Function: {hue.b}{name}{hue.q} (D={len(bounds)})...")
        results[name] = {}

        pbar = tqdm(list(Strategy), desc=f"{name} Strategies", leave=False)
        for strategy in pbar:
            fun = [
                de_optimize(benchmark, bounds, popsize=popsize, maxiter=maxiter, mutation=0.5,
                            recombination=0.9, strategy=strategy, seed=seed).fun
                for seed in range(repeats)
            ]
            results[name][strategy.name] = {
                "mean": float(np.mean(fun)),
                "std": float(np.std(fun)),
                "nfev": popsize + popsize * maxiter,
            }

        # SciPy reference with a comparable budget (popsize there is a multiplier of D)
        ref = [
            differential_evolution(benchmark, bounds, strategy="rand1bin", maxiter=maxiter,
                                   popsize=max(1, popsize // len(bounds)), tol=0.0, polish=False,
                                   mutation=0.5, recombination=0.9, seed=seed).fun
            for seed in range(repeats)
        ]
        results[name]["SCIPY_RAND1BIN"] = {"mean": float(np.mean(ref)), "std": float(np.std(ref)), "nfev": -1}

        best = min(results[name].items(), key=lambda kv: kv[1]["mean"])
        logger.info(f"best strategy on {name}: {hue.g}{best[0]}{hue.q} (mean {hue.m}{best[1]['mean']:.4e}{hue.q})")

    return results


if __name__ == "__main__":
    seed_everything(42)

    output_dir = os.path.join(project_root, "runs")
    os.makedirs(output_dir, exist_ok=True)

    results = bench_strategies(["sphere", "rosenbrock", "rastrigin", "ackley", "branin", "six_hump_camel"],
                               n_dim=5, popsize=40, maxiter=200, repeats=3)

    with open(os.path.join(output_dir, "strategy_benchmark.json"), "w") as f:
        json.dump(results, f, indent=4)

    logger.info(f"{hue.b}Benchmarking Complete. Results saved to {output_dir}{hue.q}")
