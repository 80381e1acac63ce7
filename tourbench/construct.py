# tourbench/construct.py

import logging

import numpy as np

from .distance import DistanceTable
from .tour import START, Tour

logger = logging.getLogger(__name__)


def nearest_neighbor(table: DistanceTable) -> Tour:
    """
    Construct a closed tour using the nearest neighbor heuristic.

    Starts at START and always walks to the closest unvisited point. Ties go to
    the lowest index (strict less-than over an ascending scan).

    Args:
        table: Distance table of the instance

    Returns:
        Tour of n + 1 entries with its length as score
    """
    n = table.n
    rows = table.rows
    visited = np.zeros(n, dtype=bool)
    path = [START]
    visited[START] = True
    current = START
    score = 0.0

    for _ in range(1, n):
        best_next = -1
        best_dist = np.inf
        row = rows[current]
        for j in range(n):
            if not visited[j] and row[j] < best_dist:
                best_dist = row[j]
                best_next = j
        path.append(best_next)
        visited[best_next] = True
        score += best_dist
        current = best_next

    # Close the cycle
    path.append(START)
    score += rows[current][START]

    logger.debug("Nearest neighbor tour built: n=%d, score=%.3f", n, score)
    return Tour(path, score)
