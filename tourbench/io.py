# tourbench/io.py

"""
Text boundary of the solver.

Input is a point count on the first line followed by one "x y" integer pair
per line. Output is a single line with the closed tour indices.
"""

import logging
from typing import Iterable, TextIO

import numpy as np

from .errors import InputError

logger = logging.getLogger(__name__)


def read_instance(stream: TextIO) -> np.ndarray:
    """
    Parse an instance from a text stream.

    Returns:
        np.ndarray of shape (n, 2) with integer coordinates
    """
    lines = [line for line in stream.read().splitlines() if line.strip()]
    if not lines:
        raise InputError("Empty input: expected a point count")

    try:
        n = int(lines[0].strip())
    except ValueError:
        raise InputError(f"Point count is not an integer: {lines[0].strip()!r}") from None
    if n < 1:
        raise InputError(f"Point count must be positive, got {n}")
    if len(lines) - 1 < n:
        raise InputError(f"Expected {n} coordinate lines, got {len(lines) - 1}")

    coords = np.zeros((n, 2), dtype=np.int64)
    for i, line in enumerate(lines[1:n + 1]):
        parts = line.split()
        if len(parts) < 2:
            raise InputError(f"Line {i + 2}: expected two integers, got {line.strip()!r}")
        try:
            coords[i, 0] = int(parts[0])
            coords[i, 1] = int(parts[1])
        except ValueError:
            raise InputError(f"Line {i + 2}: non-numeric coordinate in {line.strip()!r}") from None

    return coords


def format_tour(tour: Iterable[int]) -> str:
    return ' '.join(str(int(x)) for x in tour)


def write_tour(tour: Iterable[int], stream: TextIO):
    stream.write(format_tour(tour) + '\n')
    stream.flush()


def describe(coords: np.ndarray):
    """Dump the loaded instance to the debug log."""
    logger.debug("n: %d", len(coords))
    for x, y in coords:
        logger.debug("%d %d", x, y)
