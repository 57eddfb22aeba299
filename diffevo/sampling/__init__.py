# diffevo/sampling/__init__.py
"""
diffevo.sampling: Designs of Experiments used to seed the initial population.
"""

from .doe import uniform_design, lhs_design, scale_design


__all__ = [
    "uniform_design", "lhs_design", "scale_design",
]
