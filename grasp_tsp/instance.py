from __future__ import annotations

from typing import Sequence

import numpy as np

from .geometry import _numba_tour_length, distance_matrix


class ProblemInstance:
    """
    A read-only Euclidean TSP instance.

    Cities are identified by their row index in ``coordinates``. The rounded
    distance matrix is computed on first use and cached.
    """

    def __init__(self, coordinates: np.ndarray):
        coordinates = np.array(coordinates, dtype=np.float64)
        coordinates.flags.writeable = False
        self._coordinates = coordinates
        self._distance_matrix = None

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Sequence[float]] | np.ndarray) -> "ProblemInstance":
        """
        Validate raw ``(x, y)`` pairs and build an instance from them.

        Raises:
            ValueError: if there are fewer than 2 cities, the input is not shaped
                (n, 2), or any coordinate is not a finite number.
        """
        try:
            coords = np.asarray(coordinates, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Coordinates must be numeric (x, y) pairs: {exc}") from exc

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f"Coordinates must have shape (n, 2), got {coords.shape}.")
        if coords.shape[0] < 2:
            raise ValueError("TSP requires at least 2 cities.")
        if not np.all(np.isfinite(coords)):
            bad = np.flatnonzero(~np.isfinite(coords).all(axis=1))
            raise ValueError(f"Coordinates must be finite, cities {bad.tolist()} are not.")
        return cls(coords)

    @property
    def coordinates(self) -> np.ndarray:
        return self._coordinates

    @property
    def n_cities(self) -> int:
        return len(self._coordinates)

    @property
    def distance_matrix(self) -> np.ndarray:
        if self._distance_matrix is None:
            matrix = distance_matrix(self._coordinates)
            matrix.flags.writeable = False
            self._distance_matrix = matrix
        return self._distance_matrix

    def __len__(self) -> int:
        return self.n_cities

    def __repr__(self) -> str:
        return f"ProblemInstance(n_cities={self.n_cities})"


def as_instance(obj) -> ProblemInstance:
    """Pass instances through untouched, validate anything else as coordinates."""
    if isinstance(obj, ProblemInstance):
        return obj
    return ProblemInstance.from_coordinates(obj)


def _as_cycle(order, n_cities: int) -> np.ndarray:
    tour = np.asarray(order)
    if tour.ndim != 1 or len(tour) == 0:
        raise ValueError("A tour must be a non-empty sequence of city indices.")
    if not np.issubdtype(tour.dtype, np.integer):
        raise ValueError(f"City indices must be integers, got dtype {tour.dtype}.")
    if tour.min() < 0 or tour.max() >= n_cities:
        raise ValueError(f"City indices must lie in [0, {n_cities}).")
    if len(np.unique(tour)) != len(tour):
        raise ValueError("A tour cannot visit the same city twice.")
    return tour.astype(np.int64, copy=False)


def tour_length(order, instance) -> float:
    """
    Total length of the closed cycle visiting ``order`` and returning to its start.

    Args:
        order: distinct city indices, usually a full permutation of 0..n-1.
        instance: a ProblemInstance, or raw (x, y) coordinates.

    Raises:
        ValueError: if ``order`` repeats a city or references one that does not exist.
    """
    instance = as_instance(instance)
    tour = _as_cycle(order, instance.n_cities)
    return _numba_tour_length(tour, instance.distance_matrix)
