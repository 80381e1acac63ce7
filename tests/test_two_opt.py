import pytest

from tourbench.clock import Deadline
from tourbench.construct import nearest_neighbor
from tourbench.distance import DistanceTable
from tourbench.tour import Tour, tour_length, validate_tour
from tourbench.two_opt import two_opt, two_opt_delta


def test_uncrosses_square(unit_square):
    table = DistanceTable(unit_square)
    path = [0, 2, 1, 3, 0]
    tour = Tour(path, tour_length(path, table))

    two_opt(tour, table)

    assert tour.score == pytest.approx(4.0)
    tour.check(table)


def test_delta_matches_recomputation(random_coords):
    table = DistanceTable(random_coords(20, seed=1))
    path = nearest_neighbor(table).path
    before = tour_length(path, table)
    delta = two_opt_delta(path, 3, 11, table)
    path[3:11] = path[3:11][::-1]
    assert tour_length(path, table) - before == pytest.approx(delta)


@pytest.mark.parametrize('seed', [0, 1, 2])
def test_reaches_local_optimum(random_coords, seed):
    n = 50
    table = DistanceTable(random_coords(n, seed=seed))
    tour = nearest_neighbor(table)
    initial = tour.score

    two_opt(tour, table, epsilon=0.01)

    tour.check(table)
    assert tour.score <= initial
    for i in range(1, n):
        for j in range(i + 1, n + 1):
            assert two_opt_delta(tour.path, i, j, table) >= -0.01


def test_tiny_instances_unchanged():
    for coords in ([[0, 0]], [[0, 0], [3, 4]]):
        table = DistanceTable(coords)
        tour = nearest_neighbor(table)
        path = list(tour.path)
        two_opt(tour, table)
        assert tour.path == path


def test_expired_deadline_leaves_tour(random_coords, step_clock):
    table = DistanceTable(random_coords(30))
    tour = nearest_neighbor(table)
    before = tour.copy()

    two_opt(tour, table, deadline=Deadline(0, clock=step_clock))

    assert tour.path == before.path
    assert tour.score == before.score


def test_stops_early_but_stays_valid(random_coords, step_clock):
    n = 80
    table = DistanceTable(random_coords(n, seed=9))
    tour = nearest_neighbor(table)

    # Enough clock reads for only a handful of rows
    two_opt(tour, table, deadline=Deadline(0.05, clock=step_clock))

    assert validate_tour(tour.path, n)[0]
    tour.check(table)
