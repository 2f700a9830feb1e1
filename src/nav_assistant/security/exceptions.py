"""
Security-related exceptions.
"""


class SecurityError(Exception):
    """Base exception for rejected input."""

    pass


class ValidationError(SecurityError):
    """Raised when a user query fails validation."""

    pass
