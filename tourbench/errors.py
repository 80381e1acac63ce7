# tourbench/errors.py

"""Exception types raised by tourbench."""


class TourbenchError(Exception):
    """Base class for every error raised by the package."""


class InputError(TourbenchError):
    """The instance text could not be parsed."""


class InstanceError(TourbenchError):
    """The point set is empty or has the wrong shape."""


class CapacityError(TourbenchError):
    """The instance has more points than the configured maximum."""

    def __init__(self, n: int, max_nodes: int):
        super().__init__(f"Instance has {n} points, maximum supported is {max_nodes}")
        self.n = n
        self.max_nodes = max_nodes


class ConfigError(TourbenchError):
    """A configuration value is missing or out of range."""


class TourInvariantError(TourbenchError):
    """A tour is not a closed permutation or its score has drifted."""
