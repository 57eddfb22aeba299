# diffevo/utils/__init__.py
"""
diffevo.utils: Workflow utilities shared by the optimizer and the apps.
Includes:
    Colored Logger (hue_logger.py),
    Seeding Helpers (seeder.py),
"""

# Hoist from hue_logger (Colored Logger)
from .hue_logger import hue, logger

# Hoist from seeder (Seeding Helpers)
from .seeder import seed_everything, make_rng


__all__ = [
    # Colored Logger
    "hue", "logger",

    # Seeding Helpers
    "seed_everything", "make_rng",
]
