# tourbench/tour.py

import math
from typing import List, Tuple

from .distance import DistanceTable
from .errors import TourInvariantError

START = 0

SCORE_TOLERANCE = 1e-6


class Tour:
    """
    Closed tour over n points with an incrementally maintained score.

    `path` has n + 1 entries; the first and last are the start index and the
    first n entries are a permutation of 0..n-1. Operators mutate `path` in
    place and add their move deltas to `score`.
    """

    __slots__ = ('path', 'score')

    def __init__(self, path: List[int], score: float):
        self.path = path
        self.score = score

    @property
    def n(self) -> int:
        return len(self.path) - 1

    def copy(self) -> 'Tour':
        return Tour(list(self.path), self.score)

    def recompute(self, table: DistanceTable) -> float:
        """From-scratch length of the path."""
        return tour_length(self.path, table)

    def check(self, table: DistanceTable, tolerance: float = SCORE_TOLERANCE):
        """Raise TourInvariantError if the permutation or score invariant is broken."""
        valid, msg = validate_tour(self.path, table.n)
        if not valid:
            raise TourInvariantError(msg)
        actual = self.recompute(table)
        if not math.isclose(self.score, actual, rel_tol=tolerance, abs_tol=tolerance):
            raise TourInvariantError(
                f"Tracked score {self.score} differs from recomputed {actual}"
            )

    def __repr__(self):
        return f"Tour(n={self.n}, score={self.score:.3f})"


def tour_length(path, table: DistanceTable) -> float:
    """Compute total length of an explicitly closed path."""
    rows = table.rows
    length = 0.0
    for a, b in zip(path, path[1:]):
        length += rows[a][b]
    return length


def validate_tour(path, n: int) -> Tuple[bool, str]:
    """Validate that path is a closed Hamiltonian cycle starting at START."""
    if len(path) != n + 1:
        return False, f"Tour has {len(path)} entries, expected {n + 1}"
    if path[0] != START or path[-1] != START:
        return False, f"Tour must start and end at {START}"
    if sorted(path[:-1]) != list(range(n)):
        return False, "Tour must visit each point exactly once"
    return True, "Valid tour"
