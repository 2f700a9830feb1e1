"""
Tests for environment configuration and the chat model factory.
"""
import pytest
from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from nav_assistant.config_loader import load_config_from_env
from nav_assistant.config_validator import get_optional_env, get_required_env
from nav_assistant.exceptions import ConfigurationError
from nav_assistant.llm_factory import get_llm_instance

from conftest import DATA_DIR

ENV_KEYS = [
    "SITE_MAP_PATH", "FAQ_PATH", "LLM_PROVIDER", "LLM_MODEL", "LLM_TIMEOUT_SECONDS",
    "ENABLE_FALLBACK", "REQUEST_LOG_DIR", "LOG_RETENTION_DAYS", "MAX_QUERY_LENGTH",
    "RATE_LIMIT", "CORS_ORIGINS", "OPENAI_API_KEY", "GROQ_API_KEY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestLoadConfig:

    def test_defaults(self):
        config = load_config_from_env(validate_paths=False)

        assert config.llm_provider == "openai"
        assert config.llm_model == "gpt-4o-mini"
        assert config.llm_timeout_seconds == 10.0
        assert config.enable_fallback is True
        assert config.max_query_length == 500
        assert config.rate_limit == "20 per minute"
        assert "https://kuprikqurilish.uz" in config.cors_origins
        assert "http://localhost:5173" in config.cors_origins

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "groq")
        monkeypatch.setenv("LLM_MODEL", "llama-3.1-8b-instant")
        monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("ENABLE_FALLBACK", "false")
        monkeypatch.setenv("LOG_RETENTION_DAYS", "7")

        config = load_config_from_env(validate_paths=False)

        assert config.llm_provider == "groq"
        assert config.llm_timeout_seconds == 2.5
        assert config.enable_fallback is False
        assert config.log_retention_days == 7

    def test_cors_origins_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://kuprikqurilish.uz, https://admin.kuprik.uz ,")

        config = load_config_from_env(validate_paths=False)

        assert config.cors_origins == ["https://kuprikqurilish.uz", "https://admin.kuprik.uz"]

    def test_lexicon_paths_checked(self, monkeypatch):
        monkeypatch.setenv("SITE_MAP_PATH", str(DATA_DIR / "siteMap.json"))
        monkeypatch.setenv("FAQ_PATH", str(DATA_DIR / "faq.json"))

        config = load_config_from_env()

        assert config.faq_path.endswith("faq.json")

    def test_missing_lexicon_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SITE_MAP_PATH", str(tmp_path / "missing.json"))
        monkeypatch.setenv("FAQ_PATH", str(DATA_DIR / "faq.json"))

        with pytest.raises(ConfigurationError, match="SITE_MAP_PATH"):
            load_config_from_env()

    def test_malformed_number(self, monkeypatch):
        monkeypatch.setenv("MAX_QUERY_LENGTH", "lots")

        with pytest.raises(ConfigurationError):
            load_config_from_env(validate_paths=False)

    def test_non_positive_timeout(self, monkeypatch):
        monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "0")

        with pytest.raises(ConfigurationError, match="LLM_TIMEOUT_SECONDS"):
            load_config_from_env(validate_paths=False)


class TestEnvHelpers:

    def test_required_missing(self):
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY is required"):
            get_required_env("OPENAI_API_KEY")

    def test_required_placeholder(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "your_openai_api_key_here")

        with pytest.raises(ConfigurationError, match="placeholder"):
            get_required_env("OPENAI_API_KEY")

    def test_optional_placeholder_falls_back(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "your_model_name")

        with pytest.warns(UserWarning):
            assert get_optional_env("LLM_MODEL", "gpt-4o-mini") == "gpt-4o-mini"


class TestLLMFactory:

    def test_openai(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test-1234567890abcdef")

        llm = get_llm_instance("openai", "gpt-4o-mini", timeout=5.0)

        assert isinstance(llm, ChatOpenAI)
        assert llm.model_name == "gpt-4o-mini"
        assert llm.max_retries == 0

    def test_groq(self, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk_test1234567890abcdef")

        llm = get_llm_instance("GROQ", "llama-3.1-8b-instant")

        assert isinstance(llm, ChatGroq)

    def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            get_llm_instance("openai", "gpt-4o-mini")

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            get_llm_instance("anthropic", "some-model")
