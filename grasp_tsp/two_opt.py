import logging

import numpy as np

from .instance import ProblemInstance
from .tour import Tour

logger = logging.getLogger(__name__)


def stochastic_two_opt(permutation: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Reverse a random segment of ``permutation`` and return the result as a new array.

    Positions i and j are drawn so that j is neither i nor one of its cyclic
    neighbours, then the half-open slice [min(i, j), max(i, j)) is reversed.
    The reversed slice always holds at least two cities, so the output never
    equals the input.
    """
    perm = np.array(permutation, dtype=np.int64)
    n = len(perm)
    if n < 4:
        raise ValueError(f"Stochastic 2-opt needs at least 4 cities, got {n}.")

    i = int(rng.integers(n))
    excluded = (i, (i - 1) % n, (i + 1) % n)
    j = int(rng.integers(n))
    while j in excluded:
        j = int(rng.integers(n))

    if j < i:
        i, j = j, i
    perm[i:j] = perm[i:j][::-1]
    return perm


def local_search(best: Tour, instance: ProblemInstance, max_no_improvements: int,
                 rng: np.random.Generator) -> Tour:
    """
    Refine ``best`` with random 2-opt moves, keeping only strict improvements.

    Stops once ``max_no_improvements`` consecutive moves fail to improve. At
    least one move is always tried.

    Returns:
        The best tour seen, which is ``best`` itself if nothing improved on it.
    """
    if max_no_improvements < 1:
        raise ValueError(f"max_no_improvements must be >= 1, got {max_no_improvements}.")
    if instance.n_cities < 4:
        # every cyclic order of 3 or fewer cities has the same length
        return best

    count = 0
    attempts = 0
    while True:
        attempts += 1
        candidate = Tour.from_order(stochastic_two_opt(best.order, rng), instance)
        if candidate.cost < best.cost:
            best = candidate
            count = 0
        else:
            count += 1
        if count >= max_no_improvements:
            break

    logger.debug("local search finished after %d moves, cost=%s", attempts, best.cost)
    return best
