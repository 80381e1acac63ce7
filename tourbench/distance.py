# tourbench/distance.py

import numpy as np

from .config import DEFAULT_MAX_NODES
from .errors import CapacityError, InstanceError


class DistanceTable:
    """
    Symmetric pairwise Euclidean distances between integer points.

    Only the upper triangle is computed; it is mirrored into the lower half.
    The underlying matrix is read-only once built.

    Args:
        coords: Array-like of shape (n, 2) with integer coordinates
        max_nodes: Largest instance accepted
    """

    def __init__(self, coords, max_nodes: int = DEFAULT_MAX_NODES):
        try:
            raw = np.array(coords, dtype=np.float64)
        except (TypeError, ValueError):
            raise InstanceError("Coordinates must be numeric (n, 2) pairs") from None
        if raw.size == 0:
            raise InstanceError("Instance needs at least one point")
        if raw.ndim != 2 or raw.shape[1] != 2:
            raise InstanceError(f"Coordinates must have shape (n, 2), got {raw.shape}")
        if not np.array_equal(raw, np.rint(raw)):
            raise InstanceError("Coordinates must be integers")
        coords = raw.astype(np.int64)
        n = len(coords)
        if n > max_nodes:
            raise CapacityError(n, max_nodes)

        self.n = n
        self.coords = coords
        self.coords.setflags(write=False)
        self.matrix = _compute_distance_matrix(coords)
        self.matrix.setflags(write=False)
        # Row lists for the scalar inner loops of the search operators
        self.rows = self.matrix.tolist()

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, key):
        return self.matrix[key]


def _compute_distance_matrix(coords: np.ndarray) -> np.ndarray:
    """Upper triangle of the distance matrix, mirrored."""
    n = len(coords)
    dist = np.zeros((n, n))
    iu, ju = np.triu_indices(n, k=1)
    diff = (coords[iu] - coords[ju]).astype(np.float64)
    d = np.sqrt(np.sum(diff ** 2, axis=1))
    dist[iu, ju] = d
    dist[ju, iu] = d
    return dist
