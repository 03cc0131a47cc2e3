"""
Bombard-Ant: genetic algorithm for bomb placement over ant nests

Evolves fixed-length lists of bomb positions to maximize the number of
ants killed across a registry of nests.

Modules:
- geometry: Points, grid bounds and distances
- nests: Nest catalog and registry-wide quantities
- fitness: Order-dependent kill attribution
- data_models: Chromosome, RunConfig, GenerationStats
- selection: Roulette-wheel parent selection
- crossover: Single-point crossover
- mutation: Per-gene random re-placement
- evolution: Generational loop and best-ever tracking
- config_loader: YAML configuration and validation
- io_utils: History, best-candidate and summary outputs
- visualization: Matplotlib rendering of solutions and fitness curves
- cli: Run orchestration for the command line
"""

__version__ = "0.1.0"

from .data_models import Chromosome, RunConfig, GenerationStats
from .evolution import EvolutionLoop, EvolutionState, InvalidStateError

__all__ = [
    "Chromosome",
    "RunConfig",
    "GenerationStats",
    "EvolutionLoop",
    "EvolutionState",
    "InvalidStateError",
]
