"""
Crossover operator for the bombing GA.

Single-point crossover over the ordered bomb list: the genes up to and
including the crossover point come from one parent, the rest from the other.
"""

from typing import Tuple

import numpy as np

from .data_models import Chromosome, create_chromosome
from .fitness import FitnessModel
from .geometry import GridBounds
from .mutation import mutate


def single_point_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    crossover_rate: float,
    mutation_rate: float,
    model: FitnessModel,
    bounds: GridBounds,
    rng: np.random.Generator
) -> Tuple[Chromosome, Chromosome]:
    """
    Produce two children from two parents, then mutate each child.

    With probability ``crossover_rate`` a point k in [0, len - 1] is drawn;
    child A takes parent A's genes at indices <= k and parent B's genes
    after it, child B the complement. Otherwise both children are copies
    of their parents.

    Args:
        parent_a: First parent (left untouched)
        parent_b: Second parent (left untouched)
        crossover_rate: Probability of gene mixing
        mutation_rate: Per-gene mutation probability applied to both children
        model: Fitness model for the children
        bounds: Grid bounds for mutation
        rng: Random number generator

    Returns:
        Tuple of (child_a, child_b)
    """
    if rng.random() < crossover_rate:
        point = int(rng.integers(0, len(parent_a.bombs)))
        genes_a = parent_a.bombs[:point + 1] + parent_b.bombs[point + 1:]
        genes_b = parent_b.bombs[:point + 1] + parent_a.bombs[point + 1:]
    else:
        genes_a = parent_a.bombs
        genes_b = parent_b.bombs

    # create_chromosome copies the genes, so mutation never reaches the parents
    child_a = create_chromosome(genes_a, model)
    child_b = create_chromosome(genes_b, model)

    mutate(child_a, mutation_rate, model, bounds, rng)
    mutate(child_b, mutation_rate, model, bounds, rng)

    return child_a, child_b
