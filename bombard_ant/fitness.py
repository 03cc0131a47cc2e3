"""
Fitness evaluation for bomb placements.

A candidate's fitness is the total number of ants its bombs kill. Bombs are
applied in gene order against a working copy of every nest's ant count, so
a nest exhausted by an earlier bomb yields nothing to later bombs of the
same candidate.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .geometry import Point, distance
from .nests import max_pairwise_distance

KILL_EPSILON = 0.00001
DMAX_SCALE = 20.0


def calculate_kills(ants: float, dist: float, dmax: float) -> float:
    """
    Raw kill value of one bomb against one nest before clamping.

    Args:
        ants: Ants still alive in the nest
        dist: Distance between bomb and nest
        dmax: Maximum pairwise nest distance of the registry

    Returns:
        Strictly positive kill value
    """
    return ants * (dmax / DMAX_SCALE) * dist + KILL_EPSILON


@dataclass
class FitnessModel:
    """
    Nest registry snapshot plus blast radius used to score candidates.

    Attributes:
        nests: Active nests in registry order (never mutated)
        blast_radius: Maximum bomb-to-nest distance that still kills
        dmax: Maximum pairwise nest distance, derived from ``nests``
    """
    nests: List[Point]
    blast_radius: float
    dmax: float = field(init=False)

    def __post_init__(self):
        """Snapshot the nests and cache dmax for this registry."""
        self.nests = [Point(n.x, n.y, n.ants) for n in self.nests]
        self.dmax = max_pairwise_distance(self.nests)

    def _attribute_kills(self, bombs: Sequence[Point]) -> Tuple[float, List[float]]:
        remaining = [float(n.ants) for n in self.nests]
        per_nest = [0.0] * len(self.nests)
        total_kills = 0.0

        for bomb in bombs:
            for i, nest in enumerate(self.nests):
                d = distance(nest, bomb)
                if d > self.blast_radius or remaining[i] <= 0:
                    continue

                kills = calculate_kills(remaining[i], d, self.dmax)
                if kills >= remaining[i]:
                    # Nest exhausted
                    kills = remaining[i]
                    remaining[i] = 0.0
                else:
                    remaining[i] -= kills

                total_kills += kills
                per_nest[i] += kills

        return total_kills, per_nest

    def evaluate(self, bombs: Sequence[Point]) -> float:
        """Total ants killed by ``bombs`` applied in order"""
        total_kills, _ = self._attribute_kills(bombs)
        return total_kills

    def kill_breakdown(self, bombs: Sequence[Point]) -> List[float]:
        """
        Ants killed in each nest by ``bombs``.

        Returns:
            List aligned with ``nests``; each entry is at most that nest's
            original ant count
        """
        _, per_nest = self._attribute_kills(bombs)
        return per_nest

    def total_ants(self) -> int:
        return sum(n.ants for n in self.nests)
