# diffevo/benchmarks/__init__.py
"""
diffevo.benchmarks: Test objectives with their default search boxes.
"""

from .functions import BenchmarkFunctions, Benchmark, BENCHMARKS, get_benchmark


__all__ = [
    "BenchmarkFunctions", "Benchmark", "BENCHMARKS", "get_benchmark",
]
