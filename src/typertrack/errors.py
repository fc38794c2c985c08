"""Exception hierarchy shared by every typertrack module."""

from typing import Any, List


class TyperTrackError(Exception):
    """Base class for every error raised by typertrack."""


class MissingAnalyticsError(TyperTrackError, RuntimeError):
    """Raised when an analytics call fires before a host SDK instance is set."""


class ViolationError(TyperTrackError, ValueError):
    """Raised when an event payload does not match its properties class."""

    def __init__(self, message: str, violations: List[Any]) -> None:
        super().__init__(message)
        self.violations = violations


class ConfigurationError(TyperTrackError, KeyError):
    """Raised when generator metadata cannot be read from the environment."""

    def __str__(self) -> str:
        # KeyError quotes its argument by default
        return str(self.args[0]) if self.args else ""


class UnknownEventError(TyperTrackError, KeyError):
    """Raised when a registry lookup names no registered event."""
