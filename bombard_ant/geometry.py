"""
Geometry primitives for the bombing simulation.

Points live on a continuous rectangular grid. Nests and bombs share the
same Point type; only nests carry a meaningful ant count.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass
class Point:
    """A location on the grid with an optional ant count"""
    x: float
    y: float
    ants: int = 0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class GridBounds:
    """Rectangular area [0, width] x [0, height] in which bombs are placed"""
    width: float = 100.0
    height: float = 100.0

    def contains(self, point: Point) -> bool:
        return 0.0 <= point.x <= self.width and 0.0 <= point.y <= self.height


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points"""
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return math.sqrt(dx * dx + dy * dy)


def random_point(bounds: GridBounds, rng: np.random.Generator) -> Point:
    """
    Draw a uniformly random bomb position inside the grid.

    Args:
        bounds: Grid bounds to sample from
        rng: Random number generator

    Returns:
        New Point with zero ants
    """
    return Point(
        x=float(rng.random() * bounds.width),
        y=float(rng.random() * bounds.height)
    )
