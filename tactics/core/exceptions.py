"""Exception hierarchy for the battle core.

Configuration problems and broken invariants are raised. Bad user input is
absorbed by the turn states and only logged; a failed path search is an
invalid PathResult, not an exception.
"""
from typing import Optional


class TacticsError(Exception):
    """Base exception for battle core errors."""
    pass


class GridConfigurationError(TacticsError):
    """Raised when the grid or scenario data cannot be set up."""

    def __init__(self, message: str, source: Optional[str] = None):
        if source:
            message = f"{message} ({source})"
        super().__init__(message)
        self.source = source


class InvalidArgumentError(TacticsError, ValueError):
    """Raised for out-of-range positions, indices or malformed input."""
    pass


class InvariantViolationError(TacticsError, RuntimeError):
    """Raised when an internal precondition is broken."""
    pass
