"""
Model-backed fallback for navigation matching.

Used only after both keyword matchers abstain. The model is asked to pick a
URL from the site map or answer NOT_FOUND; whatever it returns is checked
against the lexicon before it is trusted.
"""
import asyncio
import logging
from dataclasses import dataclass
from time import time
from typing import Optional

from ..lexicon import Lexicon
from ..models import NavigationEntry
from ..prompts import NAVIGATION_FALLBACK_PROMPT, SECTION_LINE
from .model_client import ModelClient, ModelReply

logger = logging.getLogger(__name__)

NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class FallbackResult:
    """
    Outcome of a fallback call.

    ``model`` and ``tokens`` are only set when the model actually answered;
    a failed call carries no model metadata.
    """
    url: str
    matched: bool
    entry: Optional[NavigationEntry] = None
    model: Optional[str] = None
    tokens: int = 0
    processing_ms: Optional[int] = None

    @property
    def intent(self) -> Optional[str]:
        return self.entry.intent if self.entry else None

    @classmethod
    def not_found(
        cls,
        model: Optional[str] = None,
        tokens: int = 0,
        processing_ms: Optional[int] = None,
    ) -> "FallbackResult":
        return cls(url=NOT_FOUND, matched=False, model=model, tokens=tokens, processing_ms=processing_ms)


class ModelFallbackResolver:
    """
    Resolves a query to a navigation entry by asking an external model.

    Never raises for model problems: transport errors, timeouts, the
    NOT_FOUND sentinel and unknown URLs all come back as a not-found result.
    No retries.
    """

    TEMPERATURE = 0.0
    MAX_TOKENS = 50
    KEYWORD_SAMPLE = 5

    def __init__(
        self,
        lexicon: Lexicon,
        client: ModelClient,
        timeout: Optional[float] = None,
        site_name: str = "Kuprik Qurilish",
    ):
        """
        :param lexicon: Lexicon whose navigation entries are offered to the model
        :param client: Model client
        :param timeout: Upper bound in seconds for the async call (None: no bound)
        :param site_name: Site name used in the prompt
        """
        self._lexicon = lexicon
        self._client = client
        self._timeout = timeout
        self._site_name = site_name

    def build_prompt(self, query: str) -> str:
        sections = "\n\n".join(
            SECTION_LINE.format(
                index=index,
                intent=entry.intent,
                url=entry.url,
                keywords=", ".join(entry.keywords[:self.KEYWORD_SAMPLE]),
            )
            for index, entry in enumerate(self._lexicon.navigation, start=1)
        )
        example_url = self._lexicon.navigation[0].url if self._lexicon.navigation else "/"
        return NAVIGATION_FALLBACK_PROMPT.format(
            site_name=self._site_name,
            query=query,
            sections=sections,
            example_url=example_url,
            not_found=NOT_FOUND,
        )

    def resolve(self, query: str) -> FallbackResult:
        prompt = self.build_prompt(query)
        start = time()
        try:
            reply = self._client.complete(
                prompt, temperature=self.TEMPERATURE, max_tokens=self.MAX_TOKENS
            )
        except Exception as e:
            logger.error(f"Navigation model call failed: {e}", exc_info=True)
            return FallbackResult.not_found()

        return self._interpret(reply, int((time() - start) * 1000))

    async def aresolve(self, query: str) -> FallbackResult:
        """Async twin of resolve(); the model call is bounded by the timeout."""
        prompt = self.build_prompt(query)
        start = time()
        try:
            reply = await asyncio.wait_for(
                self._client.acomplete(
                    prompt, temperature=self.TEMPERATURE, max_tokens=self.MAX_TOKENS
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Navigation model call timed out after {self._timeout}s")
            return FallbackResult.not_found()
        except Exception as e:
            logger.error(f"Navigation model call failed: {e}", exc_info=True)
            return FallbackResult.not_found()

        return self._interpret(reply, int((time() - start) * 1000))

    def _interpret(self, reply: ModelReply, processing_ms: int) -> FallbackResult:
        text = reply.text.strip()
        model = self._client.model_name
        logger.info(f'Navigation model response: "{text}" ({model}, {processing_ms}ms, {reply.total_tokens} tokens)')

        if text == NOT_FOUND:
            return FallbackResult.not_found(model=model, tokens=reply.total_tokens, processing_ms=processing_ms)

        entry = self._lexicon.find_by_url(text)
        if entry is None:
            logger.warning(f"Navigation model returned unknown URL: {text!r}")
            return FallbackResult.not_found(model=model, tokens=reply.total_tokens, processing_ms=processing_ms)

        return FallbackResult(
            url=entry.url,
            matched=True,
            entry=entry,
            model=model,
            tokens=reply.total_tokens,
            processing_ms=processing_ms,
        )
