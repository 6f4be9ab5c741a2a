from typing import Optional

import numpy as np

from .config import GRASPConfig
from .instance import ProblemInstance
from .search import GRASP


class TSPSolver:
    def __init__(self, coordinates: np.ndarray, config: Optional[GRASPConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the TSP solver.

        Args:
            coordinates: Numpy array of shape (n, 2) containing the (x, y) coordinates of each city.
            config: GRASP parameters, the defaults when omitted.
            rng: random source handed to the search, see :meth:`GRASP.search`.
        """
        self.instance = ProblemInstance.from_coordinates(coordinates)
        self.coordinates = self.instance.coordinates
        self.distance_matrix = self.instance.distance_matrix
        self.grasp = GRASP(config)
        self.rng = rng
        self.result = None

    def solve(self) -> np.ndarray:
        """
        Solve the Traveling Salesman Problem (TSP) with GRASP.

        Returns:
            A numpy array of shape (n,) containing a permutation of integers
            [0, 1, ..., n-1] representing the order in which the cities are visited.
        """
        self.result = self.grasp.search(self.instance, self.rng)
        return np.array(self.result.order, dtype=np.int64)
