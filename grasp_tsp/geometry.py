import numpy as np
from numba import njit


# ==============================================================================
# Numba-accelerated kernels
# They take the distance matrix as an explicit argument and release the GIL so
# parallel restarts can evaluate tours concurrently.
# ==============================================================================

@njit(cache=True, nogil=True)
def _numba_tour_length(tour: np.ndarray, dist_matrix: np.ndarray) -> float:
    """Length of the closed cycle through ``tour``, wrap-around edge included."""
    n = len(tour)
    total = 0.0
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        total += dist_matrix[a, b]
    return total


def euc_2d(city_a, city_b) -> float:
    """
    Euclidean distance between two (x, y) points rounded to the nearest integer.

    This is the TSPLIB EUC_2D convention. Ties are rounded half to even, so
    every comparison between tour costs is made on integral values.
    """
    dx = float(city_a[0]) - float(city_b[0])
    dy = float(city_a[1]) - float(city_b[1])
    return float(np.rint(np.sqrt(dx * dx + dy * dy)))


def distance_matrix(coordinates: np.ndarray) -> np.ndarray:
    """
    Pairwise rounded distances.

    Args:
        coordinates: Numpy array of shape (n, 2) containing the (x, y) coordinates of each city.

    Returns:
        Numpy array of shape (n, n), symmetric with a zero diagonal.
    """
    coords = np.asarray(coordinates, dtype=np.float64)
    diff = coords[:, None, :] - coords[None, :, :]
    return np.rint(np.sqrt(np.sum(diff * diff, axis=-1)))
