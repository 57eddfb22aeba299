# Donor Index Sampler for Differential Evolution
# Author: Shengning Wang

from typing import List

import numpy as np

from diffevo.optimization.errors import InsufficientDonorsError


class DonorSampler:
    """
    Shuffled permutation buffer of population indices.

    One instance belongs to one optimization run. The buffer of integers [0, N) is
    shuffled in place (Fisher-Yates, uniform over all N! orderings) once per
    individual update, and the strategy reads its leading entries as donor indices.

    By default the index of the individual being updated may appear among its own
    donors. With ``exclude_self=True`` that index is skipped, as in canonical DE.

    Attributes:
        size (int): Population size N.
        exclude_self (bool): Whether the current index is withheld from its donors.
        buffer (np.ndarray): The permutation buffer. Shape: (N,).
    """

    def __init__(self, size: int, rng: np.random.Generator, exclude_self: bool = False):
        """
        Args:
            size (int): Population size N.
            rng (np.random.Generator): Random source of the run.
            exclude_self (bool): Skip the current index when drawing donors.
        """
        self.size = int(size)
        self.rng = rng
        self.exclude_self = exclude_self
        self.buffer = np.arange(self.size)

    @property
    def capacity(self) -> int:
        """Largest number of distinct donors one draw can return."""
        return self.size - 1 if self.exclude_self else self.size

    def check(self, k: int) -> None:
        """
        Raises:
            InsufficientDonorsError: If a draw of ``k`` distinct donors is impossible.
        """
        if k > self.capacity:
            raise InsufficientDonorsError(k, max(self.capacity, 0))

    def sample(self, k: int, current: int) -> List[int]:
        """
        Reshuffles the buffer and returns the first ``k`` admissible indices.

        Args:
            k (int): Number of donors, 2 to 5 depending on the strategy.
            current (int): Index of the individual being updated.

        Returns:
            List[int]: ``k`` distinct population indices.

        Raises:
            InsufficientDonorsError: If the population cannot supply ``k`` donors.
        """
        self.check(k)
        self.rng.shuffle(self.buffer)

        if not self.exclude_self:
            return [int(i) for i in self.buffer[:k]]

        donors: List[int] = []
        for i in self.buffer:
            if i != current:
                donors.append(int(i))
                if len(donors) == k:
                    break
        return donors
