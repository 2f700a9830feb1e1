"""
Configuration loader.

Builds NavAssistantConfig from environment variables (and a local .env file
during development).
"""
from typing import List, Optional

from dotenv import load_dotenv
from .config import DEFAULT_CORS_ORIGINS, NavAssistantConfig
from .config_validator import get_optional_env, validate_path
from .exceptions import ConfigurationError


def load_config_from_env(validate_paths: bool = True) -> NavAssistantConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = NavAssistantApp(config)
        app.initialize()

    :param validate_paths: Check that the lexicon files exist
    :return: Validated NavAssistantConfig instance
    :raises ConfigurationError: If a value is malformed or a lexicon file is missing
    """
    load_dotenv()

    try:
        config = NavAssistantConfig(
            site_map_path=get_optional_env("SITE_MAP_PATH", default="data/siteMap.json"),
            faq_path=get_optional_env("FAQ_PATH", default="data/faq.json"),
            llm_provider=get_optional_env("LLM_PROVIDER", default="openai"),
            llm_model=get_optional_env("LLM_MODEL", default="gpt-4o-mini"),
            llm_timeout_seconds=float(get_optional_env("LLM_TIMEOUT_SECONDS", "10")),
            enable_fallback=get_optional_env("ENABLE_FALLBACK", "true").lower() == "true",
            request_log_dir=get_optional_env("REQUEST_LOG_DIR", default="logs"),
            log_retention_days=int(get_optional_env("LOG_RETENTION_DAYS", "30")),
            max_query_length=int(get_optional_env("MAX_QUERY_LENGTH", "500")),
            rate_limit=get_optional_env("RATE_LIMIT", default="20 per minute"),
            cors_origins=_split_origins(get_optional_env("CORS_ORIGINS")),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e

    if config.llm_timeout_seconds <= 0:
        raise ConfigurationError("LLM_TIMEOUT_SECONDS must be positive.")

    if validate_paths:
        validate_path(config.site_map_path, "SITE_MAP_PATH", must_exist=True)
        validate_path(config.faq_path, "FAQ_PATH", must_exist=True)

    return config


def _split_origins(value: Optional[str]) -> List[str]:
    """Comma-separated CORS_ORIGINS, or the built-in allow-list when unset."""
    if not value:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]
