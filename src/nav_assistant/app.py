"""
Public application facade for the navigation assistant.

This is the single stable entry point for the library: the HTTP layer and
scripts go through it, never through the resolvers directly.
"""
import logging
import os
from pathlib import Path
from time import time
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from .chat import ChatResponder
from .config import NavAssistantConfig
from .data_loader import LexiconLoader
from .exceptions import AssistantNotInitializedError
from .lexicon import Lexicon
from .llm_factory import get_llm_instance
from .orchestration import ResolutionOrchestrator, create_orchestrator
from .resolution import ResolutionResult
from .schemas import ChatReply, ChatResponse

logger = logging.getLogger(__name__)


class NavAssistantApp:
    """
    Application facade.

    All dependency wiring is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = NavAssistantApp(config)
        app.initialize()
        result = app.detect("narxlar haqida")
    """

    def __init__(
        self,
        config: NavAssistantConfig,
        llm: Optional[BaseChatModel] = None,
        lexicon: Optional[Lexicon] = None,
    ):
        """
        :param config: NavAssistantConfig instance
        :param llm: Chat model to use instead of building one from config
        :param lexicon: Lexicon to use instead of loading the configured files
        """
        self._config = config
        self._llm = llm
        self._lexicon = lexicon
        self._orchestrator: Optional[ResolutionOrchestrator] = None
        self._responder: Optional[ChatResponder] = None

    @property
    def lexicon(self) -> Optional[Lexicon]:
        return self._lexicon

    @property
    def is_initialized(self) -> bool:
        return self._orchestrator is not None

    def initialize(self) -> None:
        """
        Load the lexicon, build the chat model and wire the resolution chain.

        Call once before serving. Lexicon problems raise LexiconLoadError
        and a missing API key raises ConfigurationError: the service must not
        start in either state.
        """
        if self._orchestrator:
            return

        if self._lexicon is None:
            # Relative paths missing from the CWD are resolved against the project root
            project_dir = Path(__file__).parent.parent.parent
            loader = LexiconLoader(
                site_map_path=self._resolve_path(project_dir, self._config.site_map_path),
                faq_path=self._resolve_path(project_dir, self._config.faq_path),
            )
            self._lexicon = loader.load()

        if self._llm is None:
            self._llm = get_llm_instance(
                provider=self._config.llm_provider,
                model=self._config.llm_model,
                timeout=self._config.llm_timeout_seconds,
            )

        self._orchestrator = create_orchestrator(self._lexicon, config=self._config, llm=self._llm)
        self._responder = ChatResponder(self._llm, model_name=self._config.llm_model)
        logger.info(f"Assistant initialized ({self._lexicon!r}, model: {self._config.llm_model})")

    def detect(self, query: str) -> ResolutionResult:
        """Resolve a validated query to an FAQ, a navigation target or NOT_FOUND."""
        return self._require_orchestrator().detect(query)

    async def adetect(self, query: str) -> ResolutionResult:
        return await self._require_orchestrator().adetect(query)

    def navigate(self, query: str) -> ResolutionResult:
        """Resolution only, no chat reply."""
        return self.detect(query)

    def chat(self, query: str) -> ChatResponse:
        """
        Resolve a query and produce the user-facing reply.

        :param query: Validated user query
        :return: ChatResponse with the resolution, the reply and total latency
        """
        start_time = time()
        resolution = self.detect(query)
        reply = self._require_responder().respond(query, resolution)
        return ChatResponse(
            resolution=resolution,
            reply=reply,
            latency_ms=int((time() - start_time) * 1000),
        )

    def talk(self, query: str) -> ChatReply:
        """General conversation that skips resolution."""
        return self._require_responder().talk(query)

    def _require_orchestrator(self) -> ResolutionOrchestrator:
        if not self._orchestrator:
            raise AssistantNotInitializedError("Assistant not initialized. Call initialize() first.")
        return self._orchestrator

    def _require_responder(self) -> ChatResponder:
        if not self._responder:
            raise AssistantNotInitializedError("Assistant not initialized. Call initialize() first.")
        return self._responder

    @staticmethod
    def _resolve_path(base_dir: Path, path: str) -> str:
        if os.path.isabs(path) or os.path.exists(path):
            return path
        return str(base_dir / path)
