"""
Evolution loop for the bombing GA.

Drives the generational cycle (selection, crossover, mutation,
replacement) and keeps an independent copy of the best chromosome seen
across all generations.

States:
    UNINITIALIZED -> READY (reset) -> RUNNING (run) -> STOPPED
    reset() returns to READY from any state.
"""

from enum import Enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .crossover import single_point_crossover
from .data_models import Chromosome, GenerationStats, RunConfig, random_chromosome
from .fitness import FitnessModel
from .nests import build_catalog, select_nests
from .selection import roulette_wheel_selection, total_fitness


class EvolutionState(Enum):
    """Lifecycle states of an EvolutionLoop"""
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    STOPPED = "stopped"


class InvalidStateError(RuntimeError):
    """Raised when an operation needs a seeded population"""
    pass


class EvolutionLoop:
    """Generational GA over bomb placements"""

    def __init__(self,
                 config: Optional[RunConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize evolution loop

        Args:
            config: Run configuration used by the next reset()
            rng: Random number generator (defaults to an unseeded generator)
        """
        self.config = config if config is not None else RunConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

        self.model: Optional[FitnessModel] = None
        self.population: List[Chromosome] = []
        self.generation = 0
        self.history: List[GenerationStats] = []
        self.state = EvolutionState.UNINITIALIZED
        self._best: Optional[Chromosome] = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def best_fitness(self) -> float:
        return self._best.fitness if self._best is not None else 0.0

    @property
    def best_candidate(self) -> Optional[Chromosome]:
        """Independent copy of the best-ever chromosome"""
        return self._best.copy() if self._best is not None else None

    @property
    def best_bombs(self) -> List[Tuple[float, float]]:
        return self._best.positions() if self._best is not None else []

    @property
    def nests(self):
        return self.model.nests if self.model is not None else []

    @property
    def total_ants(self) -> int:
        return self.model.total_ants() if self.model is not None else 0

    @property
    def kill_rate(self) -> float:
        """Best fitness as a percentage of all ants in the active nests"""
        ants = self.total_ants
        return (self.best_fitness / ants) * 100 if ants > 0 else 0.0

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def reset(self, config: Optional[RunConfig] = None) -> None:
        """
        Seed a fresh random population.

        Args:
            config: Optional new configuration; replaces the current one
        """
        if config is not None:
            self.config = config
        cfg = self.config

        catalog = build_catalog(cfg.nest_sites)
        nests = select_nests(cfg.resolved_nest_count(len(catalog)), catalog)
        self.model = FitnessModel(nests, cfg.blast_radius)

        self.population = [
            random_chromosome(cfg.bombs_per_candidate, self.model, cfg.grid, self.rng)
            for _ in range(cfg.population_size)
        ]
        self.generation = 0
        self._best = None
        self._update_best()

        self.history = [self._snapshot()]
        self.state = EvolutionState.READY

    def step(self) -> GenerationStats:
        """
        Advance one full generation.

        Returns:
            Statistics of the new generation

        Raises:
            InvalidStateError: If called before reset()
        """
        if not self.population:
            raise InvalidStateError("No population to evolve; call reset() first")

        self._update_best()
        self.population = self._next_generation()
        self.generation += 1
        self._update_best()

        stats = self._snapshot()
        self.history.append(stats)
        return stats

    def run(self,
            max_generations: Optional[int] = None,
            on_generation: Optional[Callable[["EvolutionLoop"], None]] = None) -> None:
        """
        Step until the generation counter reaches ``max_generations``.

        Args:
            max_generations: Target generation count (defaults to config)
            on_generation: Called after every step; may call stop()

        Raises:
            InvalidStateError: If called before reset()
        """
        if self.state == EvolutionState.UNINITIALIZED:
            raise InvalidStateError("Cannot run before reset()")
        if self.state == EvolutionState.RUNNING:
            return

        if max_generations is None:
            max_generations = self.config.max_generations

        self.state = EvolutionState.RUNNING
        try:
            while self.state == EvolutionState.RUNNING and self.generation < max_generations:
                self.step()
                if on_generation is not None:
                    on_generation(self)
        finally:
            self.state = EvolutionState.STOPPED

    def stop(self) -> None:
        """Stop a running loop after the current step completes."""
        if self.state != EvolutionState.UNINITIALIZED:
            self.state = EvolutionState.STOPPED

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_generation(self) -> List[Chromosome]:
        cfg = self.config
        size = len(self.population)
        fitness_sum = total_fitness(self.population)

        next_population = []
        for _ in range(0, size, 2):
            idx_a = roulette_wheel_selection(self.population, fitness_sum, self.rng)
            idx_b = roulette_wheel_selection(self.population, fitness_sum, self.rng)
            child_a, child_b = single_point_crossover(
                self.population[idx_a],
                self.population[idx_b],
                cfg.crossover_rate,
                cfg.mutation_rate,
                self.model,
                cfg.grid,
                self.rng
            )
            next_population.append(child_a)
            if len(next_population) < size:
                next_population.append(child_b)

        return next_population

    def _population_best(self) -> Optional[Chromosome]:
        if not self.population:
            return None
        best = self.population[0]
        for chromosome in self.population[1:]:
            if chromosome.fitness > best.fitness:
                best = chromosome
        return best

    def _update_best(self) -> None:
        candidate = self._population_best()
        if candidate is None:
            return
        if self._best is None or candidate.fitness > self._best.fitness:
            self._best = candidate.copy()

    def _snapshot(self) -> GenerationStats:
        population_best = self._population_best()
        size = len(self.population)
        return GenerationStats(
            generation=self.generation,
            best_fitness=self.best_fitness,
            mean_fitness=total_fitness(self.population) / size if size else 0.0,
            population_best=population_best.fitness if population_best is not None else 0.0,
            kill_rate=self.kill_rate
        )
