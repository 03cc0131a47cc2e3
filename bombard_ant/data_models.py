"""
Data models for the bombing GA.

Core data structures: chromosomes (candidate bomb placements), run
configuration and per-generation statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .fitness import FitnessModel
from .geometry import GridBounds, Point, random_point
from .nests import default_nest_count


@dataclass
class Chromosome:
    """
    One candidate solution: an ordered list of bombs and its fitness.

    Attributes:
        bombs: Bomb positions in gene order (ants are always zero)
        fitness: Total kills from the most recent evaluation of ``bombs``
    """
    bombs: List[Point]
    fitness: float = 0.0

    def evaluate(self, model: FitnessModel) -> float:
        """Recompute fitness from the current genes."""
        self.fitness = model.evaluate(self.bombs)
        return self.fitness

    def copy(self) -> "Chromosome":
        """
        Create a deep copy of this chromosome.

        Returns:
            New Chromosome with copied bombs and the same fitness
        """
        return Chromosome(
            bombs=[Point(b.x, b.y) for b in self.bombs],
            fitness=self.fitness
        )

    def positions(self) -> List[Tuple[float, float]]:
        return [b.as_tuple() for b in self.bombs]

    def __len__(self) -> int:
        return len(self.bombs)


def create_chromosome(bombs: Sequence[Point], model: FitnessModel) -> Chromosome:
    """
    Build a chromosome owning copies of ``bombs`` and evaluate it.

    Args:
        bombs: Bomb positions; any ant count they carry is dropped
        model: Fitness model to evaluate against

    Returns:
        Chromosome with fitness already computed
    """
    chromosome = Chromosome(bombs=[Point(b.x, b.y) for b in bombs])
    chromosome.evaluate(model)
    return chromosome


def random_chromosome(
    num_bombs: int,
    model: FitnessModel,
    bounds: GridBounds,
    rng: np.random.Generator
) -> Chromosome:
    """Chromosome with ``num_bombs`` uniformly random bombs inside ``bounds``"""
    bombs = [random_point(bounds, rng) for _ in range(num_bombs)]
    return create_chromosome(bombs, model)


@dataclass
class RunConfig:
    """
    Parameters fixed for the duration of one evolution run.

    Attributes:
        population_size: Number of chromosomes per generation
        bombs_per_candidate: Genes per chromosome
        blast_radius: Maximum distance at which a bomb affects a nest
        crossover_rate: Probability that a parent pair is recombined
        mutation_rate: Per-gene probability of being re-drawn
        max_generations: Generation count at which ``run`` stops
        nest_count: Number of catalog nests that are active
        grid: Bounds inside which bombs are placed
        nest_sites: Optional custom catalog as {x, y, ants} dictionaries
    """
    population_size: int = 50
    bombs_per_candidate: int = 3
    blast_radius: float = 10.0
    crossover_rate: float = 0.8
    mutation_rate: float = 0.02
    max_generations: int = 100
    nest_count: Optional[int] = None
    grid: GridBounds = field(default_factory=GridBounds)
    nest_sites: Optional[List[Dict[str, Any]]] = None

    def resolved_nest_count(self, catalog_size: int) -> int:
        if self.nest_count is None:
            return default_nest_count(catalog_size)
        return self.nest_count


@dataclass
class GenerationStats:
    """Summary of one population snapshot"""
    generation: int
    best_fitness: float
    mean_fitness: float
    population_best: float
    kill_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation": self.generation,
            "best_fitness": self.best_fitness,
            "mean_fitness": self.mean_fitness,
            "population_best": self.population_best,
            "kill_rate": self.kill_rate,
        }
