#!/usr/bin/env python3
"""
Command line entry point.

Reads an instance from stdin (or --input), writes the tour to stdout and
progress to stderr.

Usage:
    tourbench < points.txt
    tourbench --time-limit-ms 2000 --seed 7 --schedule local-first -v
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import SCHEDULES, THREE_OPT_MODES, SolverConfig
from .errors import InputError, TourbenchError
from .io import describe, read_instance, write_tour
from .orchestrator import solve

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deadline-bounded Euclidean TSP solver")
    parser.add_argument('--input', type=str, default=None,
                        help="Instance file (default: stdin)")
    parser.add_argument('--env-file', type=str, default='.env',
                        help="Optional .env file with TOURBENCH_* settings")
    parser.add_argument('--time-limit-ms', type=float, default=None,
                        help="Overall time budget in milliseconds")
    parser.add_argument('--max-nodes', type=int, default=None,
                        help="Largest instance accepted")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed for the annealing random source")
    parser.add_argument('--schedule', choices=sorted(SCHEDULES), default=None,
                        help="Ordered list of improvement phases")
    parser.add_argument('--three-opt-mode', choices=THREE_OPT_MODES, default=None,
                        help="Run 3-opt once or until it stops improving")
    parser.add_argument('--check-invariants', action='store_true', default=None,
                        help="Verify tour invariants after every phase")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="-v for progress, -vv for debug output")
    return parser


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = SolverConfig.from_env(env_file=Path(args.env_file)).with_overrides(
            time_limit_ms=args.time_limit_ms,
            max_nodes=args.max_nodes,
            seed=args.seed,
            schedule=args.schedule,
            three_opt_mode=args.three_opt_mode,
            check_invariants=args.check_invariants,
        )

        if args.input:
            try:
                with open(args.input) as f:
                    coords = read_instance(f)
            except OSError as e:
                raise InputError(f"Cannot read {args.input}: {e}") from e
        else:
            coords = read_instance(sys.stdin)
        describe(coords)

        result = solve(coords, config)
    except TourbenchError as e:
        logger.error("%s", e)
        return 1

    write_tour(result.tour, sys.stdout)
    logger.info("Score: %.3f (initial %.3f, %.0f ms)",
                result.score, result.initial_score, result.elapsed_ms)
    return 0


if __name__ == "__main__":
    sys.exit(main())
