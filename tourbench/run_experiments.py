#!/usr/bin/env python3
"""
TSP Experiment Runner

This script generates various TSP instances, runs the deadline-bounded solver
on them, and reports solution quality against an MST lower bound.
"""

import argparse
import logging

import numpy as np

from .config import SCHEDULES, SolverConfig
from .construct import nearest_neighbor
from .distance import DistanceTable
from .orchestrator import solve
from .tour import validate_tour


def generate_random_instance(n: int, seed: int, distribution: str = 'uniform') -> np.ndarray:
    """Generate a random instance with integer coordinates in [0, 1000]."""
    rng = np.random.default_rng(seed)

    if distribution == 'uniform':
        coords = rng.uniform(0, 1000, size=(n, 2))
    elif distribution == 'clustered':
        # Generate 3-5 clusters
        n_clusters = rng.integers(3, 6)
        cluster_centers = rng.uniform(100, 900, size=(n_clusters, 2))
        coords = np.array([
            cluster_centers[i % n_clusters] + rng.normal(0, 50, size=2)
            for i in range(n)
        ])
    elif distribution == 'circular':
        # Points on a circle with noise
        angles = np.linspace(0, 2 * np.pi, n, endpoint=False)
        radius = 400
        coords = np.column_stack([
            500 + radius * np.cos(angles) + rng.normal(0, 20, n),
            500 + radius * np.sin(angles) + rng.normal(0, 20, n)
        ])
    elif distribution == 'grid':
        # Grid with jitter
        side = int(np.ceil(np.sqrt(n)))
        coords = np.array([
            [(i % side) * (1000 / side) + rng.uniform(-20, 20),
             (i // side) * (1000 / side) + rng.uniform(-20, 20)]
            for i in range(n)
        ])
    else:
        raise ValueError(f"Unknown distribution: {distribution}")

    return np.rint(coords).astype(np.int64)


def generate_classic_instance(name: str) -> np.ndarray:
    """Generate a classic geometric instance."""
    if name == 'square':
        # 4 corners of a square - optimal is 4000
        coords = np.array([[0, 0], [1000, 0], [1000, 1000], [0, 1000]], dtype=float)
    elif name == 'pentagon':
        n = 5
        angles = np.linspace(0, 2 * np.pi, n, endpoint=False)
        coords = np.column_stack([500 + 500 * np.cos(angles), 500 + 500 * np.sin(angles)])
    elif name == 'star':
        # 10-point star
        n = 10
        coords = []
        for i in range(n):
            angle = 2 * np.pi * i / n
            r = 500 if i % 2 == 0 else 200
            coords.append([500 + r * np.cos(angle), 500 + r * np.sin(angle)])
        coords = np.array(coords)
    elif name == 'line':
        n = 20
        coords = np.column_stack([np.linspace(0, 1000, n), np.full(n, 500.0)])
    else:
        raise ValueError(f"Unknown classic instance: {name}")

    return np.rint(coords).astype(np.int64)


def compute_lower_bound(table: DistanceTable) -> float:
    """Weight of a minimum spanning tree (Prim), a lower bound on any tour."""
    n = table.n
    dist = table.matrix

    in_mst = np.zeros(n, dtype=bool)
    min_edge = np.full(n, np.inf)
    min_edge[0] = 0
    mst_weight = 0.0

    for _ in range(n):
        candidates = np.where(in_mst, np.inf, min_edge)
        u = int(np.argmin(candidates))
        in_mst[u] = True
        mst_weight += min_edge[u]
        # Update distances
        min_edge = np.where(~in_mst & (dist[u] < min_edge), dist[u], min_edge)

    return float(mst_weight)


def print_tour_ascii(coords: np.ndarray, tour: list, width: int = 60, height: int = 20):
    """Print an ASCII visualization of the points, numbered by tour position."""
    min_x, max_x = coords[:, 0].min(), coords[:, 0].max()
    min_y, max_y = coords[:, 1].min(), coords[:, 1].max()

    range_x = max_x - min_x if max_x > min_x else 1
    range_y = max_y - min_y if max_y > min_y else 1

    grid = [[' ' for _ in range(width)] for _ in range(height)]

    for pos, city in enumerate(tour[:-1]):
        x, y = coords[city]
        col = int((x - min_x) / range_x * (width - 1))
        row = height - 1 - int((y - min_y) / range_y * (height - 1))
        grid[row][col] = str(pos) if pos < 10 else '*'

    print("+" + "-" * width + "+")
    for row in grid:
        print("|" + "".join(row) + "|")
    print("+" + "-" * width + "+")


def run_classic_instances(time_limit_ms: float):
    """Run on classic geometric instances."""
    print("\n" + "=" * 70)
    print("CLASSIC INSTANCES: Known Geometric Configurations")
    print("=" * 70)

    for name in ['square', 'pentagon', 'star', 'line']:
        coords = generate_classic_instance(name)
        table = DistanceTable(coords)
        lb = compute_lower_bound(table)

        result = solve(coords, SolverConfig(time_limit_ms=time_limit_ms, seed=0))
        valid, msg = validate_tour(result.tour, len(coords))

        print(f"\n--- {name.upper()} ({len(coords)} cities) ---")
        print(f"Tour length: {result.score:.0f} ({msg})")
        print(f"MST lower bound: {lb:.0f}")
        print(f"Gap from LB: {(result.score - lb) / lb * 100:.1f}%")
        print(f"Time: {result.elapsed_ms:.1f} ms")
        print(f"Tour: {result.tour}")

        if len(coords) <= 20:
            print("\nVisualization:")
            print_tour_ascii(coords, result.tour)


def run_scaling_experiment(time_limit_ms: float):
    """Test how the solver scales with problem size."""
    print("\n" + "=" * 70)
    print("SCALING EXPERIMENT: Performance vs Problem Size")
    print("=" * 70)

    print(f"\n{'Size':>6} | {'NN Length':>12} | {'Final':>12} | {'Improvement':>10} | {'Time (ms)':>10}")
    print("-" * 64)

    for n in [10, 20, 50, 100, 200, 250]:
        coords = generate_random_instance(n, seed=42)
        nn_length = nearest_neighbor(DistanceTable(coords)).score
        result = solve(coords, SolverConfig(time_limit_ms=time_limit_ms, seed=42))
        improvement = (nn_length - result.score) / nn_length * 100

        print(f"{n:>6} | {nn_length:>12.0f} | {result.score:>12.0f} | {improvement:>9.1f}% | {result.elapsed_ms:>10.1f}")


def run_distribution_experiment(time_limit_ms: float):
    """Test performance on different spatial distributions."""
    print("\n" + "=" * 70)
    print("DISTRIBUTION EXPERIMENT: Performance on Different City Layouts")
    print("=" * 70)

    n = 50
    print(f"\n{'Distribution':>12} | {'Avg Length':>12} | {'Std Dev':>10} | {'Avg Gap LB':>10}")
    print("-" * 54)

    for distribution in ['uniform', 'clustered', 'circular', 'grid']:
        lengths = []
        gaps = []
        for seed in range(5):
            coords = generate_random_instance(n, seed=seed, distribution=distribution)
            lb = compute_lower_bound(DistanceTable(coords))
            result = solve(coords, SolverConfig(time_limit_ms=time_limit_ms, seed=seed))
            lengths.append(result.score)
            gaps.append((result.score - lb) / lb * 100)

        print(f"{distribution:>12} | {np.mean(lengths):>12.1f} | {np.std(lengths):>10.1f} | {np.mean(gaps):>9.1f}%")


def run_seed_sensitivity_experiment(time_limit_ms: float):
    """Test how different random seeds affect solution quality."""
    print("\n" + "=" * 70)
    print("SEED SENSITIVITY: Solution Variance Across Random Seeds")
    print("=" * 70)

    n = 100
    coords = generate_random_instance(n, seed=0)
    results = [
        solve(coords, SolverConfig(time_limit_ms=time_limit_ms, seed=seed)).score
        for seed in range(10)
    ]

    print(f"\nInstance: {n} cities, uniform distribution")
    print(f"  Best solution:   {min(results):.0f}")
    print(f"  Worst solution:  {max(results):.0f}")
    print(f"  Mean:            {np.mean(results):.1f}")
    print(f"  Std deviation:   {np.std(results):.1f}")
    print(f"  Gap (best-worst): {(max(results) - min(results)) / min(results) * 100:.2f}%")


def run_time_limit_experiment():
    """Test impact of time limit on solution quality."""
    print("\n" + "=" * 70)
    print("TIME LIMIT EXPERIMENT: Solution Quality vs Computation Time")
    print("=" * 70)

    n = 200
    coords = generate_random_instance(n, seed=42)

    print(f"\nInstance: {n} cities, uniform distribution")
    print(f"\n{'Time Limit (ms)':>15} | {'Solution':>12} | {'Actual Time':>12}")
    print("-" * 46)

    for tl in [10, 50, 100, 500, 1000, 2000, 4950]:
        result = solve(coords, SolverConfig(time_limit_ms=tl, seed=42))
        print(f"{tl:>15} | {result.score:>12.0f} | {result.elapsed_ms:>11.1f}ms")


def run_schedule_experiment(time_limit_ms: float):
    """Compare phase orderings and 3-opt modes on the same instances."""
    print("\n" + "=" * 70)
    print("SCHEDULE EXPERIMENT: Phase Ordering and 3-opt Mode")
    print("=" * 70)

    instances = [generate_random_instance(100, seed=s) for s in range(3)]

    print(f"\n{'Schedule':>16} | {'3-opt':>8} | {'Avg Length':>12} | {'Avg Time (ms)':>13}")
    print("-" * 60)

    for schedule in sorted(SCHEDULES):
        for mode in ('single', 'converge'):
            config = SolverConfig(
                time_limit_ms=time_limit_ms, seed=1, schedule=schedule, three_opt_mode=mode,
            )
            results = [solve(coords, config) for coords in instances]
            print(f"{schedule:>16} | {mode:>8} | "
                  f"{np.mean([r.score for r in results]):>12.1f} | "
                  f"{np.mean([r.elapsed_ms for r in results]):>13.1f}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="TSP solver experiments")
    parser.add_argument('--time-limit-ms', type=float, default=500,
                        help="Time budget per solve")
    parser.add_argument('--skip-time-limit', action='store_true',
                        help="Skip the (slow) time limit sweep")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)

    print("=" * 70)
    print("TSP EXPERIMENTS")
    print("Nearest Neighbor + Annealing + 2-opt + 3-opt")
    print("=" * 70)

    run_classic_instances(args.time_limit_ms)
    run_scaling_experiment(args.time_limit_ms)
    run_distribution_experiment(args.time_limit_ms)
    run_seed_sensitivity_experiment(args.time_limit_ms)
    if not args.skip_time_limit:
        run_time_limit_experiment()
    run_schedule_experiment(args.time_limit_ms)

    print("\n" + "=" * 70)
    print("ALL EXPERIMENTS COMPLETED")
    print("=" * 70)


if __name__ == "__main__":
    main()
