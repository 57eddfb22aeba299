# diffevo/apps/__init__.py
"""
diffevo.apps: Command-line runner for benchmark optimizations.
Run with `python -m diffevo.apps.run_de --function rastrigin --dim 5`.
"""

from .args import get_args


__all__ = [
    "get_args",
]
