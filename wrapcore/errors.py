"""
Engine Error Types

Every failure inside a solve is fatal for that puzzle instance. The batch
driver catches these per instance so other files keep solving.
"""


class WrapError(Exception):
    """Base class for all engine failures."""


class InvariantViolation(WrapError):
    """Level state would become inconsistent (bad wrap/drill, lost count)."""


class InvalidActionError(WrapError):
    """A planned action cannot be executed from the drone's real state."""


class SchedulingError(WrapError):
    """A drone has nothing to do while empty cells remain."""


class LevelFormatError(WrapError):
    """The level description text could not be parsed."""
