class NavAssistantError(Exception):
    """Base exception for the navigation assistant service."""


class ConfigurationError(NavAssistantError):
    """Raised when required configuration is missing or invalid."""


class LexiconLoadError(ConfigurationError):
    """Raised when the FAQ or site map data cannot be loaded."""


class AssistantNotInitializedError(NavAssistantError):
    """Raised when the assistant is used before initialization."""
