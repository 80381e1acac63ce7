import numpy as np
import pytest

from tourbench.distance import DistanceTable
from tourbench.run_experiments import (
    compute_lower_bound,
    generate_classic_instance,
    generate_random_instance,
    print_tour_ascii,
)


@pytest.mark.parametrize('distribution', ['uniform', 'clustered', 'circular', 'grid'])
def test_random_instances_are_integer(distribution):
    coords = generate_random_instance(30, seed=1, distribution=distribution)
    assert coords.shape == (30, 2)
    assert coords.dtype == np.int64


def test_unknown_distribution():
    with pytest.raises(ValueError):
        generate_random_instance(5, seed=0, distribution='spiral')


def test_square_lower_bound():
    table = DistanceTable(generate_classic_instance('square'))
    assert compute_lower_bound(table) == pytest.approx(3000.0)


def test_line_lower_bound_is_span():
    coords = generate_classic_instance('line')
    assert compute_lower_bound(DistanceTable(coords)) == pytest.approx(1000.0, abs=1)


def test_ascii_plot(capsys):
    coords = generate_classic_instance('square')
    print_tour_ascii(coords, [0, 1, 2, 3, 0], width=10, height=5)
    out = capsys.readouterr().out
    assert out.count('\n') == 7
    for label in '0123':
        assert label in out
