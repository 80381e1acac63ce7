# tourbench/annealing.py

import logging
import math

import numpy as np

from .clock import Deadline
from .distance import DistanceTable
from .tour import Tour, tour_length

logger = logging.getLogger(__name__)

# Below this size a shuffled window has no room to move
MIN_NODES = 10

MIN_WIDTH = 3
MAX_WIDTH = 10  # exclusive

INITIAL_THRESHOLD = 0.5
DECAY = 10.0


def acceptance_threshold(t: float) -> float:
    """Probability of accepting a worse candidate at elapsed fraction t."""
    return INITIAL_THRESHOLD * math.exp(-DECAY * t ** 3)


def shuffle_window(path, rng: np.random.Generator) -> list:
    """
    Copy of path with one random interior window shuffled.

    The window has width in [MIN_WIDTH, MAX_WIDTH) and lies within positions
    1..n-1, so the start/end entries never move.
    """
    n = len(path) - 1
    width = int(rng.integers(MIN_WIDTH, MAX_WIDTH))
    start = int(rng.integers(1, n - width + 1))
    candidate = list(path)
    window = candidate[start:start + width]
    rng.shuffle(window)
    candidate[start:start + width] = window
    return candidate


class AnnealingPerturber:
    """
    Random window shuffling with a time-decaying acceptance rule.

    Not a Metropolis schedule: a non-improving candidate is accepted with
    probability 0.5 * exp(-10 * t^3), independent of how much worse it is.

    Args:
        table: Distance table
        rng: Random source; pass a seeded generator for reproducible runs
    """

    def __init__(self, table: DistanceTable, rng: np.random.Generator):
        self.table = table
        self.rng = rng
        self.trials = 0
        self.accepted = 0

    def run(self, tour: Tour, deadline: Deadline) -> Tour:
        """
        Perturb until the deadline expires.

        Args:
            tour: Starting tour; not modified
            deadline: Sub-budget for this run

        Returns:
            Best tour seen, which is `tour` itself when nothing improved on it
        """
        n = tour.n
        if n < MIN_NODES or deadline.budget_ms <= 0:
            logger.debug("Annealing skipped (n=%d, budget=%.1f ms)", n, deadline.budget_ms)
            return tour

        best = tour
        working = tour.copy()
        rng = self.rng
        trials = accepted = 0

        while not deadline.expired():
            candidate = shuffle_window(working.path, rng)
            score = tour_length(candidate, self.table)
            trials += 1

            if score < working.score:
                accept = True
            else:
                accept = rng.random() < acceptance_threshold(deadline.fraction())

            if accept:
                working = Tour(candidate, score)
                accepted += 1
                if working.score < best.score:
                    best = working.copy()

        self.trials += trials
        self.accepted += accepted
        logger.debug(
            "Annealing ran %d trials, accepted %d, best=%.3f",
            trials, accepted, best.score,
        )
        return best
