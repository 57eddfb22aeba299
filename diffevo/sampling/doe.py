# Initial Population Designs (uniform and Latin Hypercube)
# Author: Shengning Wang

import numpy as np
from scipy.spatial.distance import pdist
from typing import Optional


def uniform_design(num_samples: int, lower: np.ndarray, upper: np.ndarray,
                   rng: np.random.Generator) -> np.ndarray:
    """
    Draw every coordinate uniformly in [lower_d, upper_d)

    Args:
    - num_samples (int): Number of candidates N
    - lower (np.ndarray): Lower bounds, shape (num_dimensions,)
    - upper (np.ndarray): Upper bounds, shape (num_dimensions,)
    - rng (np.random.Generator): Random source of the run

    Returns:
    - np.ndarray: The design matrix (num_samples, num_dimensions)
    """
    return lower + rng.random((num_samples, lower.size)) * (upper - lower)


def lhs_design(num_samples: int, num_dimensions: int, rng: np.random.Generator,
               iterations: Optional[int] = None) -> np.ndarray:
    """
    Generate a latin hypercube sampling design with optional maximin optimization

    Args:
    - num_samples (int): Number of samples to generate
    - num_dimensions (int): Number of dimensions for each sample
    - rng (np.random.Generator): Random source of the run
    - iterations (Optional[int]): Number of candidate designs for maximin selection.
                                  If None, uses basic LHS without optimization.

    Returns:
    - np.ndarray: The design matrix (num_samples, num_dimensions) in [0, 1)
    """

    def generate_basic_lhs() -> np.ndarray:
        design = np.zeros([num_samples, num_dimensions])

        # one stratum per sample in every dimension
        for dimension in range(num_dimensions):
            design[:, dimension] = rng.permutation(num_samples) + rng.uniform(0.0, 1.0, num_samples)

        return design / num_samples


    if iterations is None or num_samples < 2:
        return generate_basic_lhs()


    # Maximin optimization version
    best_design = None
    best_min_distance = -np.inf

    for _ in range(iterations):
        current_design = generate_basic_lhs()
        current_min_distance = np.min(pdist(current_design))

        if current_min_distance > best_min_distance:
            best_min_distance = current_min_distance
            best_design = current_design.copy()

    return best_design


def scale_design(design: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """
    Map a unit-cube design into the box [lower, upper]

    Args:
    - design (np.ndarray): Design in [0, 1), shape (num_samples, num_dimensions)
    - lower (np.ndarray): Lower bounds, shape (num_dimensions,)
    - upper (np.ndarray): Upper bounds, shape (num_dimensions,)

    Returns:
    - np.ndarray: Scaled design (num_samples, num_dimensions)
    """
    return lower + design * (upper - lower)
