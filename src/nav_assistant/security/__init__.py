"""
Input validation for the HTTP boundary.
"""

from .exceptions import SecurityError, ValidationError
from .input_validator import InputValidator

__all__ = [
    "SecurityError",
    "ValidationError",
    "InputValidator",
]
