"""
Custom exceptions for isrctag.
"""

from typing import Optional


class IsrcTagError(Exception):
    """Base exception for isrctag.

    ``stage`` names the step that failed (lookup, search, selection, album,
    artwork, tagging, rename) once the error has left the component that
    raised it.
    """

    def __init__(self, message: str = "", stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def with_stage(self, stage: str) -> "IsrcTagError":
        """Record the failed stage unless an inner component already did."""
        if self.stage is None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class NotFoundError(IsrcTagError):
    """Exception raised when the catalog has no object for a lookup."""
    pass


class NetworkError(IsrcTagError, ConnectionError):
    """Exception raised when network operations fail."""
    pass


class DecodeError(IsrcTagError, ValueError):
    """Exception raised when a response body does not have the expected shape."""
    pass


class InputError(IsrcTagError):
    """Exception raised when an interactive selection is aborted."""
    pass


class ConfigurationError(IsrcTagError):
    """Exception raised when configuration is invalid."""
    pass


class TaggingError(IsrcTagError):
    """Exception raised when an audio file cannot be read, tagged or renamed."""
    pass
