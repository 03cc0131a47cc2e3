"""
Mutation operator for the bombing GA.

Each gene is independently re-drawn uniformly inside the grid; the
chromosome is re-evaluated once after all genes have been visited.
"""

from typing import List

import numpy as np

from .data_models import Chromosome
from .fitness import FitnessModel
from .geometry import GridBounds, random_point


def mutate(
    chromosome: Chromosome,
    mutation_rate: float,
    model: FitnessModel,
    bounds: GridBounds,
    rng: np.random.Generator
) -> List[int]:
    """
    Mutate ``chromosome`` in place.

    Args:
        chromosome: Chromosome to mutate
        mutation_rate: Per-gene probability of replacement
        model: Fitness model used for the re-evaluation
        bounds: Grid bounds for replacement positions
        rng: Random number generator

    Returns:
        Indices of the genes that were replaced
    """
    mutated = []
    for i, bomb in enumerate(chromosome.bombs):
        if rng.random() < mutation_rate:
            replacement = random_point(bounds, rng)
            bomb.x = replacement.x
            bomb.y = replacement.y
            mutated.append(i)

    chromosome.evaluate(model)
    return mutated
