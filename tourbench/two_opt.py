# tourbench/two_opt.py

import logging
from typing import Optional

from .clock import Deadline
from .config import DEFAULT_TWO_OPT_EPSILON
from .distance import DistanceTable
from .tour import Tour

logger = logging.getLogger(__name__)


def two_opt(
    tour: Tour,
    table: DistanceTable,
    deadline: Optional[Deadline] = None,
    epsilon: float = DEFAULT_TWO_OPT_EPSILON,
) -> int:
    """
    First-improvement 2-opt until no sweep finds an improving move.

    For every pair of edges (i-1, i) and (j-1, j) with i < j, reversing
    path[i:j] replaces them with (i-1, j-1) and (i, j). A move is applied as
    soon as its delta is below -epsilon.

    Args:
        tour: Tour to improve in place
        table: Distance table
        deadline: Checked once per i row; the search stops when it expires
        epsilon: Minimum gain for a move to count

    Returns:
        Number of sweeps started
    """
    n = tour.n
    path = tour.path
    dist = table.rows

    improved = True
    sweeps = 0
    while improved:
        if deadline is not None and deadline.expired():
            break
        improved = False
        sweeps += 1
        for i in range(1, n):
            if deadline is not None and deadline.expired():
                logger.debug("2-opt stopped by deadline in sweep %d", sweeps)
                return sweeps
            for j in range(i + 1, n + 1):
                a, b = path[i - 1], path[i]
                c, d = path[j - 1], path[j]
                delta = (dist[a][c] + dist[b][d]) - (dist[a][b] + dist[c][d])

                if delta < -epsilon:
                    path[i:j] = path[i:j][::-1]
                    tour.score += delta
                    improved = True

    logger.debug("2-opt finished after %d sweeps, score=%.3f", sweeps, tour.score)
    return sweeps


def two_opt_delta(path, i: int, j: int, table: DistanceTable) -> float:
    """Change in tour length from reversing path[i:j]."""
    dist = table.rows
    a, b = path[i - 1], path[i]
    c, d = path[j - 1], path[j]
    return (dist[a][c] + dist[b][d]) - (dist[a][b] + dist[c][d])
