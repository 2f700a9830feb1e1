import logging
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from .config_validator import get_required_env

logger = logging.getLogger(__name__)

KNOWN_OPENAI_MODELS = ["gpt-4o-mini", "gpt-4o", "gpt-4.1-mini", "gpt-4.1-nano"]
KNOWN_GROQ_MODELS = ["llama-3.1-8b-instant", "llama-3.3-70b-versatile"]


def get_llm_instance(provider: str, model: str, timeout: float = 10.0) -> BaseChatModel:
    """
    Factory returning a ready-to-use chat model for the given provider.

    Retries are disabled: a failed call degrades to a not-found result
    instead of being repeated.

    :param provider: 'openai' or 'groq'
    :param model: Model name
    :param timeout: Per-request timeout in seconds
    :return: LangChain chat model
    """
    provider = provider.lower()

    if provider == "openai":
        api_key = get_required_env(
            "OPENAI_API_KEY",
            description="OpenAI API key (get from https://platform.openai.com/api-keys)",
        )
        if model not in KNOWN_OPENAI_MODELS:
            logger.warning(f"Model '{model}' not in known OpenAI models: {KNOWN_OPENAI_MODELS}")
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            streaming=False,
        )

    elif provider == "groq":
        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key (get from https://console.groq.com/keys)",
        )
        if model not in KNOWN_GROQ_MODELS:
            # Groq adds models often; warn only
            logger.warning(f"Model '{model}' not in known Groq models: {KNOWN_GROQ_MODELS}")
        return ChatGroq(
            model=model,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            streaming=False,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
