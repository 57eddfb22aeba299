# Args Config for Differential Evolution Benchmark Runs
# Author: Shengning Wang

import argparse
from typing import Optional, Sequence

from diffevo.benchmarks import BENCHMARKS
from diffevo.optimization import Strategy


def get_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for a Differential Evolution benchmark run.

    Args:
    - argv (Optional[Sequence[str]]): Argument list; sys.argv[1:] when None.

    Returns:
    - argparse.Namespace: The parsed arguments object containing all run settings.
    """
    parser = argparse.ArgumentParser(description="diffevo: Differential Evolution on benchmark functions")

    # ----------------------------------------------------------------------
    # 1. General Settings
    # ----------------------------------------------------------------------
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed of the run.")
    parser.add_argument("--output_dir", type=str, default="./runs",
                        help="Directory for the JSON run summary.")
    parser.add_argument("--disp", action="store_true",
                        help="Log best and mean fitness after every generation.")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar over generations.")

    # ----------------------------------------------------------------------
    # 2. Problem Definition
    # ----------------------------------------------------------------------
    parser.add_argument("--function", type=str, default="sphere", choices=sorted(BENCHMARKS.keys()),
                        help="Benchmark objective to minimize.")
    parser.add_argument("--dim", type=int, default=2,
                        help="Problem dimension D (ignored by fixed-dimension functions).")
    parser.add_argument("--bounds", type=float, nargs=2, default=None, metavar=("MIN", "MAX"),
                        help="Override the default box with the same (min, max) in every dimension.")

    # ----------------------------------------------------------------------
    # 3. Algorithm Settings
    # ----------------------------------------------------------------------
    parser.add_argument("--popsize", type=int, default=100,
                        help="Population size N.")
    parser.add_argument("--generations", type=int, default=1000,
                        help="Number of generations G.")
    parser.add_argument("--f", type=float, default=0.5,
                        help="Mutation factor F.")
    parser.add_argument("--f2", type=float, default=None,
                        help="Secondary mutation factor F2 (defaults to F).")
    parser.add_argument("--cr", type=float, default=0.85,
                        help="Crossover probability in [0, 1].")
    parser.add_argument("--strategy", type=str, default=Strategy.RAND_1_BIN.name,
                        choices=[s.name for s in Strategy],
                        help="Mutation/crossover strategy.")
    parser.add_argument("--init", type=str, default="random", choices=["random", "latinhypercube"],
                        help="Initial population design.")
    parser.add_argument("--exclude_self", action="store_true",
                        help="Never use the individual being updated as one of its donors.")

    args = parser.parse_args(argv)
    return args
