import logging
import math

import numpy as np

from .instance import ProblemInstance
from .tour import Tour

logger = logging.getLogger(__name__)


def construct_randomized_greedy(instance: ProblemInstance, greediness_factor: float,
                                rng: np.random.Generator) -> Tour:
    """
    Build a tour with a restricted candidate list (RCL) greedy heuristic.

    Starting from a random city, each step measures the distance from the last
    placed city to every unplaced one and picks uniformly at random among those
    within ``min + alpha * (max - min)``. ``alpha = 0`` always takes a nearest
    city, ``alpha = 1`` picks any unplaced city.

    Args:
        instance: the cities to visit.
        greediness_factor: alpha in [0, 1].
        rng: random source for the start city and the RCL draws.

    Returns:
        A Tour over all cities of ``instance``.
    """
    alpha = float(greediness_factor)
    if not math.isfinite(alpha) or not 0.0 <= alpha <= 1.0:
        raise ValueError(f"greediness_factor must be in [0, 1], got {greediness_factor}.")

    n = instance.n_cities
    dist = instance.distance_matrix

    tour = np.empty(n, dtype=np.int64)
    visited = np.zeros(n, dtype=bool)

    current_city = int(rng.integers(n))
    tour[0] = current_city
    visited[current_city] = True

    for step in range(1, n):
        candidates = np.flatnonzero(~visited)
        costs = dist[current_city, candidates]

        min_cost = costs.min()
        max_cost = costs.max()
        rcl = candidates[costs <= min_cost + alpha * (max_cost - min_cost)]

        current_city = int(rcl[rng.integers(len(rcl))])
        tour[step] = current_city
        visited[current_city] = True

    result = Tour.from_order(tour, instance)
    logger.debug("constructed tour with cost %s", result.cost)
    return result
