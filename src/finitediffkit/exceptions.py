"""Exception types raised by finitediffkit.

Both exceptions derive from :class:`ValueError` so callers that already guard
finite-difference calls with ``except ValueError`` keep working. Errors raised
by the user function itself are never wrapped and reach the caller unchanged.
"""

__all__ = [
    "ConfigurationError",
    "DimensionError",
]


class ConfigurationError(ValueError):
    """Raised for an unknown scheme or function kind, or an unsupported combination."""


class DimensionError(ValueError):
    """Raised when input, output, Jacobian or scratch buffer sizes disagree."""
