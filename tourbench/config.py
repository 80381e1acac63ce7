# tourbench/config.py

"""
Solver configuration.

Values come from (lowest to highest priority) the dataclass defaults, the
process environment (optionally seeded from a .env file) and command line
flags applied by the CLI.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_TIME_LIMIT_MS = 4950
DEFAULT_MAX_NODES = 250
DEFAULT_TWO_OPT_EPSILON = 0.01
DEFAULT_THREE_OPT_EPSILON = 0.01

PHASE_KINDS = ('anneal', 'two_opt', 'three_opt')
THREE_OPT_MODES = ('single', 'converge')

ENV_PREFIX = 'TOURBENCH_'


@dataclass(frozen=True)
class PhaseSpec:
    """
    One entry of the optimization schedule.

    `share` is the fraction of the total time budget an anneal phase may
    consume; None means "until the overall deadline". Local search phases
    ignore it and stop only at the overall deadline.
    """
    kind: str
    share: Optional[float] = None

    def __post_init__(self):
        if self.kind not in PHASE_KINDS:
            raise ConfigError(f"Unknown phase kind: {self.kind!r}")
        if self.share is not None and not 0.0 < self.share <= 1.0:
            raise ConfigError(f"Phase share must be in (0, 1], got {self.share}")


SCHEDULES: Dict[str, Tuple[PhaseSpec, ...]] = {
    'default': (
        PhaseSpec('anneal', 0.2),
        PhaseSpec('two_opt'),
        PhaseSpec('three_opt'),
        PhaseSpec('anneal'),
    ),
    'local-first': (
        PhaseSpec('two_opt'),
        PhaseSpec('three_opt'),
        PhaseSpec('anneal'),
    ),
    'three-then-two': (
        PhaseSpec('three_opt'),
        PhaseSpec('two_opt'),
    ),
}


def get_schedule(name: str) -> List[PhaseSpec]:
    """Look up a named schedule."""
    try:
        return list(SCHEDULES[name])
    except KeyError:
        raise ConfigError(
            f"Unknown schedule {name!r}, choose from: {', '.join(sorted(SCHEDULES))}"
        ) from None


@dataclass
class SolverConfig:
    time_limit_ms: float = DEFAULT_TIME_LIMIT_MS
    max_nodes: int = DEFAULT_MAX_NODES
    seed: Optional[int] = None
    schedule: str = 'default'
    three_opt_mode: str = 'single'
    two_opt_epsilon: float = DEFAULT_TWO_OPT_EPSILON
    three_opt_epsilon: float = DEFAULT_THREE_OPT_EPSILON
    check_invariants: bool = False
    phases: Optional[List[PhaseSpec]] = field(default=None)

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.time_limit_ms <= 0:
            raise ConfigError(f"time_limit_ms must be positive, got {self.time_limit_ms}")
        if self.max_nodes < 1:
            raise ConfigError(f"max_nodes must be at least 1, got {self.max_nodes}")
        if self.three_opt_mode not in THREE_OPT_MODES:
            raise ConfigError(
                f"three_opt_mode must be one of {THREE_OPT_MODES}, got {self.three_opt_mode!r}"
            )
        if self.two_opt_epsilon < 0:
            raise ConfigError("two_opt_epsilon must not be negative")
        if self.three_opt_epsilon < 0:
            raise ConfigError("three_opt_epsilon must not be negative")
        if self.phases is None:
            get_schedule(self.schedule)

    def resolved_phases(self) -> List[PhaseSpec]:
        """Explicit phases win over the named schedule."""
        if self.phases is not None:
            return list(self.phases)
        return get_schedule(self.schedule)

    def with_overrides(self, **overrides) -> 'SolverConfig':
        """Copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None, environ=None) -> 'SolverConfig':
        """
        Build a config from TOURBENCH_* environment variables.

        Args:
            env_file: Optional .env file loaded into the environment first
            environ: Mapping to read instead of os.environ (for tests)
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(env_file)
        env = os.environ if environ is None else environ

        values = {}
        for name, cast in (
            ('time_limit_ms', float),
            ('max_nodes', int),
            ('seed', int),
            ('schedule', str),
            ('three_opt_mode', str),
            ('two_opt_epsilon', float),
            ('three_opt_epsilon', float),
            ('check_invariants', _parse_bool),
        ):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is None or raw == '':
                continue
            try:
                values[name] = cast(raw)
            except ValueError:
                raise ConfigError(f"Invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from None

        return cls(**values)


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(raw)
