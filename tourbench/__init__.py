from .config import PhaseSpec, SolverConfig, get_schedule
from .distance import DistanceTable
from .errors import (
    CapacityError,
    ConfigError,
    InputError,
    InstanceError,
    TourbenchError,
    TourInvariantError,
)
from .orchestrator import SolveResult, solve
from .tour import Tour

__all__ = [
    "solve",
    "SolveResult",
    "SolverConfig",
    "PhaseSpec",
    "get_schedule",
    "DistanceTable",
    "Tour",
    "TourbenchError",
    "InputError",
    "InstanceError",
    "CapacityError",
    "ConfigError",
    "TourInvariantError",
]
