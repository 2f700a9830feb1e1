"""
Factory wiring the resolution chain from a lexicon and an optional model.
"""
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from ..config import NavAssistantConfig
from ..lexicon import Lexicon
from .resolution_orchestrator import ResolutionOrchestrator
from ..resolution.fallback_resolver import ModelFallbackResolver
from ..resolution.faq_matcher import FAQMatcher
from ..resolution.model_client import ChatModelClient, ModelClient
from ..resolution.navigation_matcher import NavigationMatcher


def create_orchestrator(
    lexicon: Lexicon,
    config: Optional[NavAssistantConfig] = None,
    llm: Optional[BaseChatModel] = None,
    client: Optional[ModelClient] = None,
) -> ResolutionOrchestrator:
    """
    Build a ResolutionOrchestrator over ``lexicon``.

    The fallback tier is created when a ``client`` is given, or when an
    ``llm`` is given and the config enables it. Otherwise keyword misses
    resolve to NOT_FOUND.

    :param lexicon: Loaded lexicon
    :param config: NavAssistantConfig (model name, timeout, fallback switch)
    :param llm: LangChain chat model to wrap in a ChatModelClient
    :param client: Ready ModelClient, takes precedence over ``llm``
    :return: Configured ResolutionOrchestrator
    """
    config = config or NavAssistantConfig()

    if client is None and llm is not None and config.enable_fallback:
        client = ChatModelClient(llm, model_name=config.llm_model)

    fallback = None
    if client is not None:
        fallback = ModelFallbackResolver(
            lexicon=lexicon,
            client=client,
            timeout=config.llm_timeout_seconds,
        )

    return ResolutionOrchestrator(
        faq_matcher=FAQMatcher(lexicon),
        navigation_matcher=NavigationMatcher(lexicon),
        fallback=fallback,
    )
