"""Exception hierarchy for path generation."""

from typing import Optional


class PathGenError(Exception):
    """Base exception class for pathgen."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """Initialize exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(PathGenError, ValueError):
    """Raised when generation options or world dimensions are invalid."""
    pass


class WorldInvariantError(PathGenError, RuntimeError):
    """Raised when the world/path bookkeeping would become inconsistent.

    These indicate misuse of the data model, not an expected outcome of
    generation; a failed path is reported through PathResult instead.
    """
    pass
