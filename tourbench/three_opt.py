# tourbench/three_opt.py

"""
3-opt reconnection search.

The tour is cut at positions i < j < k into the segments [i, j) and [j, k).
With a=p[i-1], b=p[i], c=p[j-1], d=p[j], e=p[k-1], f=p[k] the candidate
reconnections, tried in this order, are:

    1. reverse [i, j)              a-c  b-d  e-f
    2. reverse [j, k)              a-b  c-e  d-f
    3. reverse [i, k)              a-e  c-d  b-f
    4. move [j, k) before [i, j)   a-d  e-b  c-f

The first one strictly shorter than the current a-b, c-d, e-f edges is
applied and the rest are skipped for that triple.
"""

import logging
from typing import Optional

from .clock import Deadline
from .config import DEFAULT_THREE_OPT_EPSILON
from .distance import DistanceTable
from .tour import Tour

logger = logging.getLogger(__name__)


def three_opt_pass(tour: Tour, table: DistanceTable, deadline: Optional[Deadline] = None) -> float:
    """
    One scan over all cut triples.

    Args:
        tour: Tour to improve in place
        table: Distance table
        deadline: Checked once per (i, j) row

    Returns:
        Total gain of the pass (non-negative)
    """
    n = tour.n
    path = tour.path
    dist = table.rows
    gain = 0.0

    for i in range(1, n - 3):
        for j in range(i + 2, n - 1):
            if deadline is not None and deadline.expired():
                logger.debug("3-opt pass stopped by deadline at i=%d, j=%d", i, j)
                return gain
            for k in range(j + 2, n):
                a, b = path[i - 1], path[i]
                c, d = path[j - 1], path[j]
                e, f = path[k - 1], path[k]

                d0 = dist[a][b] + dist[c][d] + dist[e][f]
                d1 = dist[a][c] + dist[b][d] + dist[e][f]
                d2 = dist[a][b] + dist[c][e] + dist[d][f]
                d3 = dist[f][b] + dist[c][d] + dist[e][a]
                d4 = dist[a][d] + dist[e][b] + dist[c][f]

                if d0 > d1:
                    path[i:j] = path[i:j][::-1]
                    delta = d1 - d0
                elif d0 > d2:
                    path[j:k] = path[j:k][::-1]
                    delta = d2 - d0
                elif d0 > d3:
                    path[i:k] = path[i:k][::-1]
                    delta = d3 - d0
                elif d0 > d4:
                    path[i:k] = path[j:k] + path[i:j]
                    delta = d4 - d0
                else:
                    continue

                tour.score += delta
                gain -= delta

    return gain


def three_opt(
    tour: Tour,
    table: DistanceTable,
    deadline: Optional[Deadline] = None,
    mode: str = 'single',
    epsilon: float = DEFAULT_THREE_OPT_EPSILON,
) -> int:
    """
    Run 3-opt in the given mode.

    'single' scans all triples once. 'converge' repeats passes until a pass
    gains no more than epsilon or the deadline expires.

    Returns:
        Number of passes run
    """
    passes = 0
    while deadline is None or not deadline.expired():
        gain = three_opt_pass(tour, table, deadline)
        passes += 1
        logger.debug("3-opt pass %d gained %.3f, score=%.3f", passes, gain, tour.score)
        if mode == 'single' or gain <= epsilon:
            break
    return passes
