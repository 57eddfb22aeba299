# Exceptions raised by the Differential Evolution optimizer
# Author: Shengning Wang


class DEError(Exception):
    """Base class of every error raised by the optimizer itself."""


class DEConfigError(DEError, ValueError):
    """
    Invalid run configuration, detected before the first objective evaluation.

    Covers non-positive population size or generation count, a crossover probability
    outside [0, 1], malformed bounds, an unknown strategy tag, and a bounds length that
    disagrees with the dimension declared by the objective.
    """


class InsufficientDonorsError(DEConfigError):
    """The population is too small to supply the donors a strategy needs."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"strategy needs {required} distinct donor indices but only {available} are available"
        )


class UninitializedBestError(DEError):
    """A best-seeking strategy was asked to mutate before any global best existed."""
