"""
Nest registry.

Holds the fixed catalog of ant nests used by the simulation and helpers
to pick the active subset and derive registry-wide quantities.
"""

from typing import List, Optional, Sequence

from .geometry import Point, distance


# (x, y, ants) for every nest in the default catalog, in registry order
NEST_CATALOG = (
    (25, 65, 100),
    (23, 8, 200),
    (7, 13, 327),
    (95, 53, 440),
    (3, 3, 450),
    (54, 56, 639),
    (67, 78, 650),
    (32, 4, 678),
    (24, 76, 750),
    (66, 89, 801),
    (84, 4, 945),
    (34, 23, 967),
)

DEFAULT_NEST_COUNT = 8


def default_nest_count(catalog_size: int = len(NEST_CATALOG)) -> int:
    return min(DEFAULT_NEST_COUNT, catalog_size)


def build_catalog(sites: Optional[Sequence[dict]] = None) -> List[Point]:
    """
    Create nest points from site definitions.

    Args:
        sites: Optional list of {x, y, ants} dictionaries. When omitted the
            built-in catalog is used.

    Returns:
        List of nest Points in registry order

    Raises:
        ValueError: If a site has a non-positive ant count
    """
    if sites is None:
        return [Point(float(x), float(y), ants) for x, y, ants in NEST_CATALOG]

    nests = []
    for site in sites:
        ants = int(float(site["ants"]))
        if ants <= 0:
            raise ValueError(f"Nest at ({site['x']}, {site['y']}) must hold a positive ant count, got {ants}")
        nests.append(Point(float(site["x"]), float(site["y"]), ants))
    return nests


def select_nests(count: Optional[int] = None, catalog: Optional[Sequence[Point]] = None) -> List[Point]:
    """
    Select the first ``count`` nests of the catalog.

    Returned points are copies so the active registry can never alias
    the catalog entries.
    """
    if catalog is None:
        catalog = build_catalog()
    if count is None:
        count = default_nest_count(len(catalog))
    return [Point(n.x, n.y, n.ants) for n in catalog[:count]]


def max_pairwise_distance(nests: Sequence[Point]) -> float:
    """Maximum distance between any two nests (0 for fewer than two nests)"""
    dmax = 0.0
    for i in range(len(nests)):
        for j in range(i + 1, len(nests)):
            d = distance(nests[i], nests[j])
            if d > dmax:
                dmax = d
    return dmax


def total_ants(nests: Sequence[Point]) -> int:
    return sum(n.ants for n in nests)
