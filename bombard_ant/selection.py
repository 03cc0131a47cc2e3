"""
Parent selection for the bombing GA.
"""

from typing import Optional, Sequence

import numpy as np

from .data_models import Chromosome


def total_fitness(population: Sequence[Chromosome]) -> float:
    return sum(c.fitness for c in population)


def roulette_wheel_selection(
    population: Sequence[Chromosome],
    fitness_sum: Optional[float],
    rng: np.random.Generator
) -> int:
    """
    Pick a parent index with probability proportional to fitness.

    Args:
        population: Current generation
        fitness_sum: Total fitness of ``population``; pass the same snapshot
            for every selection of a generation. Computed when None.
        rng: Random number generator

    Returns:
        Index into ``population``. Falls back to a uniform draw when the
        total fitness is not positive.
    """
    if fitness_sum is None:
        fitness_sum = total_fitness(population)

    if fitness_sum <= 0:
        return int(rng.integers(0, len(population)))

    wheel_slice = rng.uniform(0.0, fitness_sum)
    fitness_so_far = 0.0
    for i, chromosome in enumerate(population):
        fitness_so_far += chromosome.fitness
        if fitness_so_far >= wheel_slice:
            return i

    # Rounding left the cumulative sum short of the slice
    return len(population) - 1
