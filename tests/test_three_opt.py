import numpy as np
import pytest

from tourbench.clock import Deadline
from tourbench.construct import nearest_neighbor
from tourbench.distance import DistanceTable
from tourbench.three_opt import three_opt, three_opt_pass
from tourbench.tour import Tour, tour_length


def _random_tour(table, rng):
    inner = [int(x) for x in rng.permutation(np.arange(1, table.n))]
    path = [0] + inner + [0]
    return Tour(path, tour_length(path, table))


@pytest.mark.parametrize('seed', [0, 1, 2, 3])
def test_pass_tracks_score(random_coords, seed):
    table = DistanceTable(random_coords(25, seed=seed))
    tour = _random_tour(table, np.random.default_rng(seed))
    initial = tour.score

    gain = three_opt_pass(tour, table)

    tour.check(table)
    assert gain >= 0
    assert tour.score == pytest.approx(initial - gain)


def test_small_instances_untouched():
    # Fewer than five points leaves no room for three segments
    for coords in ([[0, 0]], [[0, 0], [1, 1]], [[0, 0], [1, 0], [1, 1], [0, 1]]):
        table = DistanceTable(coords)
        tour = nearest_neighbor(table)
        path = list(tour.path)
        assert three_opt_pass(tour, table) == 0.0
        assert tour.path == path


LINE = [[0, 0], [1, 0], [2, 0], [3, 0], [4, 0], [5, 0]]


@pytest.mark.parametrize('path, expected, score', [
    # reverse the first segment
    ([0, 2, 1, 3, 4, 5, 0], [0, 1, 2, 3, 4, 5, 0], 10.0),
    # reverse the second segment
    ([0, 1, 2, 4, 3, 5, 0], [0, 1, 2, 3, 4, 5, 0], 10.0),
    # reverse the whole span
    ([0, 3, 4, 1, 2, 5, 0], [0, 2, 1, 4, 3, 5, 0], 14.0),
])
def test_reconnection_on_line(path, expected, score):
    table = DistanceTable(LINE)
    tour = Tour(list(path), tour_length(path, table))

    three_opt_pass(tour, table)

    assert tour.path == expected
    assert tour.score == pytest.approx(score)
    tour.check(table)

@pytest.mark.parametrize('coords, path, expected, score', [
    # Reversing either segment helps; the first segment wins
    (LINE, [0, 2, 1, 4, 3, 5, 0], [0, 1, 2, 4, 3, 5, 0], 12.0),
    # Reversing the span and swapping both help; the reversal wins even
    # though the swap would be shorter
    ([[0, 0], [10, 0], [20, 0], [0, 0], [1, 0], [11, 0]],
     [0, 1, 2, 3, 4, 5, 0], [0, 4, 3, 2, 1, 5, 0], 44.0),
])
def test_first_qualifying_reconnection_wins(coords, path, expected, score):
    table = DistanceTable(coords)
    tour = Tour(list(path), tour_length(path, table))
    before = tour.score

    gain = three_opt_pass(tour, table)

    assert tour.path == expected
    assert tour.score == pytest.approx(score)
    assert gain == pytest.approx(before - score)
    tour.check(table)



def test_segment_swap():
    # Three coincident pairs; only moving [d, e] in front of [b, c] helps
    coords = [[0, 0], [3, 4], [6, 0], [0, 0], [3, 4], [6, 0]]
    table = DistanceTable(coords)
    path = [0, 1, 2, 3, 4, 5, 0]
    tour = Tour(list(path), tour_length(path, table))
    assert tour.score == pytest.approx(32.0)

    gain = three_opt_pass(tour, table)

    assert tour.path == [0, 3, 4, 1, 2, 5, 0]
    assert gain == pytest.approx(16.0)
    assert tour.score == pytest.approx(16.0)
    tour.check(table)


def test_single_mode_runs_one_pass(random_coords):
    table = DistanceTable(random_coords(30, seed=4))
    tour = nearest_neighbor(table)
    assert three_opt(tour, table, mode='single') == 1


def test_converge_never_worse_than_single(random_coords):
    table = DistanceTable(random_coords(30, seed=7))
    start = _random_tour(table, np.random.default_rng(7))

    single = start.copy()
    three_opt(single, table, mode='single')
    converged = start.copy()
    passes = three_opt(converged, table, mode='converge')

    converged.check(table)
    assert passes >= 1
    assert converged.score <= single.score + 1e-9
    # First converge pass is identical to the single pass
    if passes == 1:
        assert converged.path == single.path


def test_converge_respects_deadline(random_coords, step_clock):
    table = DistanceTable(random_coords(40, seed=2))
    tour = nearest_neighbor(table)
    before = list(tour.path)

    assert three_opt(tour, table, deadline=Deadline(0, clock=step_clock), mode='converge') == 0
    assert tour.path == before
