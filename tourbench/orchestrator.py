# tourbench/orchestrator.py

"""
Deadline-bounded solve: nearest neighbor construction followed by an ordered
list of improvement phases sharing one overall time budget.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .annealing import AnnealingPerturber
from .clock import Deadline
from .config import PhaseSpec, SolverConfig
from .construct import nearest_neighbor
from .distance import DistanceTable
from .three_opt import three_opt
from .tour import Tour
from .two_opt import two_opt

logger = logging.getLogger(__name__)


@dataclass
class PhaseRecord:
    kind: str
    score: float
    elapsed_ms: float
    skipped: bool = False


@dataclass
class SolveResult:
    tour: List[int]
    score: float
    initial_score: float
    elapsed_ms: float
    phases: List[PhaseRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'solution': self.tour,
            'objective': self.score,
            'meta': {
                'elapsed_ms': self.elapsed_ms,
                'initial_objective': self.initial_score,
                'phases': [asdict(p) for p in self.phases],
            },
        }


class Orchestrator:
    """
    Runs the phases of one solve against a shared deadline.

    Args:
        table: Distance table of the instance
        config: Solver configuration (phases, budgets, 3-opt mode, epsilon)
        deadline: Overall deadline, started by the caller
        rng: Random source for the annealing phases
    """

    def __init__(
        self,
        table: DistanceTable,
        config: SolverConfig,
        deadline: Deadline,
        rng: np.random.Generator,
    ):
        self.table = table
        self.config = config
        self.deadline = deadline
        self.perturber = AnnealingPerturber(table, rng)
        self.tour: Optional[Tour] = None
        self.records: List[PhaseRecord] = []

    def construct(self) -> Tour:
        self.tour = nearest_neighbor(self.table)
        self._record('construct')
        return self.tour

    def run_phase(self, spec: PhaseSpec):
        if self.deadline.expired():
            logger.info("Skipping %s: time budget exhausted", spec.kind)
            self.records.append(
                PhaseRecord(spec.kind, self.tour.score, self.deadline.elapsed_ms(), skipped=True)
            )
            return

        if spec.kind == 'anneal':
            if spec.share is None:
                budget_ms = self.deadline.remaining_ms()
            else:
                budget_ms = spec.share * self.config.time_limit_ms
            self.tour = self.perturber.run(self.tour, self.deadline.sub(budget_ms))
        elif spec.kind == 'two_opt':
            two_opt(self.tour, self.table, self.deadline, epsilon=self.config.two_opt_epsilon)
        elif spec.kind == 'three_opt':
            three_opt(
                self.tour,
                self.table,
                self.deadline,
                mode=self.config.three_opt_mode,
                epsilon=self.config.three_opt_epsilon,
            )

        self._record(spec.kind)

    def run(self) -> Tour:
        self.construct()
        for spec in self.config.resolved_phases():
            self.run_phase(spec)
        return self.tour

    def _record(self, kind: str):
        elapsed = self.deadline.elapsed_ms()
        logger.info("Score after %s: %.3f (%.0f ms)", kind, self.tour.score, elapsed)
        if self.config.check_invariants:
            self.tour.check(self.table)
        self.records.append(PhaseRecord(kind, self.tour.score, elapsed))


def solve(
    coords,
    config: Optional[SolverConfig] = None,
    rng: Optional[np.random.Generator] = None,
    clock: Callable[[], float] = time.perf_counter,
) -> SolveResult:
    """
    Solve a Euclidean TSP instance within the configured time limit.

    Args:
        coords: Integer coordinates, shape (n, 2)
        config: Solver configuration; defaults to SolverConfig()
        rng: Random source; defaults to np.random.default_rng(config.seed)
        clock: Time source in seconds, injectable for deterministic runs

    Returns:
        SolveResult with the closed tour (n + 1 indices) and its length
    """
    if config is None:
        config = SolverConfig()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    # The budget covers building the distance table too
    deadline = Deadline(config.time_limit_ms, clock=clock)
    table = DistanceTable(coords, max_nodes=config.max_nodes)

    orchestrator = Orchestrator(table, config, deadline, rng)
    tour = orchestrator.run()

    return SolveResult(
        tour=list(tour.path),
        score=tour.score,
        initial_score=orchestrator.records[0].score,
        elapsed_ms=deadline.elapsed_ms(),
        phases=orchestrator.records,
    )
