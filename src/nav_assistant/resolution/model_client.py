"""
Narrow interface over the external language model.

The fallback resolver only needs "given a prompt, return text or fail", so
it depends on ModelClient rather than on a vendor SDK.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage


@dataclass(frozen=True)
class ModelReply:
    text: str
    total_tokens: int = 0


class ModelClient(ABC):
    """Single-prompt completion. Implementations raise on any failure."""

    model_name: str

    @abstractmethod
    def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> ModelReply:
        pass

    @abstractmethod
    async def acomplete(self, prompt: str, *, temperature: float, max_tokens: int) -> ModelReply:
        pass


class ChatModelClient(ModelClient):
    """
    ModelClient backed by a LangChain chat model (ChatOpenAI, ChatGroq, ...).

    Sampling parameters are passed per call so one model instance can serve
    every caller.
    """

    def __init__(self, llm: BaseChatModel, model_name: str):
        """
        :param llm: LangChain chat model
        :param model_name: Model identifier reported in results and logs
        """
        self._llm = llm
        self.model_name = model_name

    def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> ModelReply:
        message = self._llm.invoke(
            [HumanMessage(content=prompt)],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return to_reply(message)

    async def acomplete(self, prompt: str, *, temperature: float, max_tokens: int) -> ModelReply:
        message = await self._llm.ainvoke(
            [HumanMessage(content=prompt)],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return to_reply(message)


def to_reply(message: BaseMessage) -> ModelReply:
    return ModelReply(text=message_text(message), total_tokens=total_tokens(message))


def message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Content blocks: keep the text parts only
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def total_tokens(message: BaseMessage) -> int:
    """Token usage reported by the provider, 0 when unavailable."""
    usage = getattr(message, "usage_metadata", None)
    if usage and usage.get("total_tokens") is not None:
        return int(usage["total_tokens"])

    token_usage = (getattr(message, "response_metadata", None) or {}).get("token_usage") or {}
    return int(token_usage.get("total_tokens") or 0)
