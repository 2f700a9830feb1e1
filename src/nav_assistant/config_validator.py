"""
Environment variable helpers used while building NavAssistantConfig.

Missing required values and obvious placeholders fail fast with a
ConfigurationError so the service never starts half-configured.
"""
import os
import warnings
from typing import Optional
from .exceptions import ConfigurationError


PLACEHOLDER_MARKERS = (
    "your_",
    "placeholder",
    "example",
    "xxx",
    "sk-0000",
    "gsk_0000",
    "replace",
    "changeme",
)


def get_required_env(key: str, description: Optional[str] = None) -> str:
    """
    Read a required environment variable.

    :param key: Environment variable name
    :param description: Human-readable description for the error message
    :return: The variable's value
    :raises ConfigurationError: If unset, empty or a placeholder
    """
    value = os.getenv(key)

    if not value:
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Export it (export {key}=...) or add it to the .env file in the project root.\n\n"
            f"Description: {description or key}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} looks like a placeholder ({_mask_secret(value)}). "
            f"Set a real value before starting the service."
        )

    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Read an optional environment variable, falling back to ``default``.

    Placeholder values are ignored with a warning.
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using the default instead.",
            UserWarning,
        )
        return default

    return value


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate a configured file path.

    :param path: Path to validate
    :param path_name: Setting name used in error messages
    :param must_exist: Whether the file must already exist
    :return: The path unchanged
    :raises ConfigurationError: If empty, or missing when ``must_exist`` is set
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")

    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Check the path in your environment or .env file."
        )

    return path


def _is_placeholder(value: str) -> bool:
    if not value:
        return False
    value_lower = value.lower()
    return any(marker in value_lower for marker in PLACEHOLDER_MARKERS)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """Mask a secret for display, keeping ``show_chars`` at each end."""
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
