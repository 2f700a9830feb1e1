"""
Site navigation assistant.

Resolves free-text queries to FAQ answers, site sections or a
conversational reply.
"""
from .app import NavAssistantApp
from .config import NavAssistantConfig
from .config_loader import load_config_from_env
from .resolution import ResolutionResult, ResolutionType

__all__ = [
    "NavAssistantApp",
    "NavAssistantConfig",
    "load_config_from_env",
    "ResolutionResult",
    "ResolutionType",
]
