"""Error taxonomy for the autoplayer.

Every error here signals a broken invariant or bad input, never a transient
condition: callers are expected to fail fast rather than retry.
"""


class AutoplayError(Exception):
    """Base class for all autottt errors."""


class OutOfRange(AutoplayError, IndexError):
    """Coordinate or line index outside [0, N)."""


class CellOccupied(AutoplayError, ValueError):
    """Attempt to mark a cell that is not empty."""


class NoLegalMove(AutoplayError, RuntimeError):
    """A move was requested on a board with no empty cell."""


class ConfigError(AutoplayError, ValueError):
    """Invalid configuration value or unparsable board text."""
