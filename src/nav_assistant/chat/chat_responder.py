"""
Chat responder - turns a resolution into the message shown to the user.
"""
import logging
from time import time
from typing import List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from ..prompts import CHAT_SYSTEM_PROMPT, GENERAL_CHAT_SYSTEM_PROMPT, NAVIGATION_REPLY_BLOCK
from ..resolution.model_client import to_reply
from ..resolution.resolution_result import KEYWORD_STRATEGY, ResolutionResult, ResolutionType
from ..schemas import ChatReply

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = "Kechirasiz, xatolik yuz berdi. Qaytadan urinib ko'ring."
NAVIGATION_FALLBACK_MESSAGE = "Bu yerga bosing"


class ChatResponder:
    """
    Produces user-facing replies.

    FAQ matches are answered from the lexicon without a model call.
    Navigation matches get a one-line redirect, everything else a short
    conversational reply. Model failures degrade to canned text with
    ``error`` set; they never raise.
    """

    CHAT_TEMPERATURE = 0.3
    NAVIGATION_MAX_TOKENS = 30
    CHAT_MAX_TOKENS = 100
    GENERAL_TEMPERATURE = 0.7
    GENERAL_MAX_TOKENS = 100

    def __init__(
        self,
        llm: Optional[BaseChatModel],
        model_name: str,
        company: str = "Ko'prikqurilish",
    ):
        """
        :param llm: LangChain chat model, or None to answer with canned text only
        :param model_name: Model identifier reported in replies
        :param company: Company name used in the system prompts
        """
        self._llm = llm
        self._model_name = model_name
        self._company = company

    def respond(self, query: str, resolution: Optional[ResolutionResult]) -> ChatReply:
        """
        Reply to a query given its resolution.

        :param query: User query
        :param resolution: Result of the resolution chain
        :return: ChatReply
        """
        if resolution is not None and resolution.type is ResolutionType.FAQ_MATCH:
            return ChatReply(message=resolution.faq.answer, model=KEYWORD_STRATEGY, tokens=0)

        navigating = resolution is not None and resolution.type is ResolutionType.NAVIGATION_MATCH
        navigation_block = (
            NAVIGATION_REPLY_BLOCK.format(intent=resolution.intent) if navigating else ""
        )
        system_prompt = CHAT_SYSTEM_PROMPT.format(
            company=self._company,
            navigation_block=navigation_block,
        )

        return self._complete(
            [SystemMessage(content=system_prompt), HumanMessage(content=query)],
            temperature=self.CHAT_TEMPERATURE,
            max_tokens=self.NAVIGATION_MAX_TOKENS if navigating else self.CHAT_MAX_TOKENS,
            fallback_message=NAVIGATION_FALLBACK_MESSAGE if navigating else APOLOGY_MESSAGE,
        )

    def talk(self, query: str) -> ChatReply:
        """General conversation, no navigation or FAQ handling."""
        system_prompt = GENERAL_CHAT_SYSTEM_PROMPT.format(company=self._company)
        return self._complete(
            [SystemMessage(content=system_prompt), HumanMessage(content=query)],
            temperature=self.GENERAL_TEMPERATURE,
            max_tokens=self.GENERAL_MAX_TOKENS,
            fallback_message=APOLOGY_MESSAGE,
        )

    def _complete(
        self,
        messages: List[BaseMessage],
        temperature: float,
        max_tokens: int,
        fallback_message: str,
    ) -> ChatReply:
        if self._llm is None:
            return ChatReply(
                message=fallback_message,
                model=self._model_name,
                error="Chat model is not configured",
            )

        start = time()
        try:
            message = self._llm.invoke(messages, temperature=temperature, max_tokens=max_tokens)
        except Exception as e:
            logger.error(f"Chat response error: {e}", exc_info=True)
            return ChatReply(message=fallback_message, model=self._model_name, error=str(e))

        reply = to_reply(message)
        return ChatReply(
            message=reply.text.strip(),
            model=self._model_name,
            tokens=reply.total_tokens,
            processing_ms=int((time() - start) * 1000),
        )
