"""
Custom exceptions for sharedrand.

Misuse of the public API is a programming error, so these are raised
immediately at the offending call and never retried or corrected.
"""


class SharedRandError(Exception):
    """Base exception for sharedrand errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class InvalidArgumentError(SharedRandError, ValueError):
    """Raised when a bound or size argument is outside its valid domain."""
    pass


class ConfigurationError(SharedRandError):
    """Raised when a source configuration is invalid."""
    pass
