from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .geometry import _numba_tour_length
from .instance import ProblemInstance


def check_feasibility(solution: List[int] | np.ndarray, problem_size: int) -> bool:
    """Checks if the TSP solution is a permutation of 0..problem_size-1."""
    if not isinstance(solution, (list, tuple, np.ndarray)):
        return False
    if len(solution) != problem_size:
        return False
    return set(solution) == set(range(problem_size))


@dataclass(frozen=True, eq=False)
class Tour:
    """
    A permutation of city indices bundled with the length of its closed cycle.

    Build tours with :meth:`from_order`; the order array is read-only, so a new
    permutation always means a new Tour with a freshly computed cost.
    """
    order: np.ndarray
    cost: float

    @classmethod
    def from_order(cls, order, instance: ProblemInstance) -> "Tour":
        raw = np.asarray(order)
        if not np.issubdtype(raw.dtype, np.integer):
            raise AssertionError(f"Tour indices must be integers, got dtype {raw.dtype}: {raw.tolist()}")
        if not check_feasibility(raw, instance.n_cities):
            raise AssertionError(
                f"Tour is not a permutation of 0..{instance.n_cities - 1}: {raw.tolist()}")
        tour = raw.astype(np.int64)
        tour.flags.writeable = False
        return cls(tour, float(_numba_tour_length(tour, instance.distance_matrix)))

    @classmethod
    def unset(cls) -> "Tour":
        """Placeholder that any real tour beats."""
        order = np.empty(0, dtype=np.int64)
        order.flags.writeable = False
        return cls(order, math.inf)

    def __len__(self) -> int:
        return len(self.order)

    def __repr__(self) -> str:
        return f"Tour(cost={self.cost}, order={self.order.tolist()})"


@dataclass(frozen=True)
class SearchResult:
    """
    Best tour of a GRASP run.

    ``iteration`` is the 0-based restart that produced ``tour``. ``history[i]``
    is the running best cost after restart ``i``; restarts skipped by a time
    limit repeat the previous value. ``iterations_run`` counts the restarts
    that actually ran.
    """
    tour: Tour
    iteration: int
    history: tuple = field(default_factory=tuple)
    iterations_run: int = 0
    elapsed: float = 0.0

    @property
    def cost(self) -> float:
        return self.tour.cost

    @property
    def order(self) -> np.ndarray:
        return self.tour.order
