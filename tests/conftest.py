"""
Shared fixtures: lexicons, a scripted chat model and a fake model client.
"""
import asyncio
from pathlib import Path
from typing import Any, List, Optional

import pytest
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult

from nav_assistant.data_loader import LexiconLoader
from nav_assistant.lexicon import Lexicon
from nav_assistant.models import FAQEntry, NavigationEntry
from nav_assistant.resolution import ModelClient, ModelReply

DATA_DIR = Path(__file__).parent.parent / "data"


class ScriptedChatModel(BaseChatModel):
    """LangChain-compatible chat model replaying canned responses."""

    responses: List[str] = ["NOT_FOUND"]
    total_tokens: int = 0
    error: Optional[Exception] = None
    calls: List[dict] = []

    @property
    def _llm_type(self) -> str:
        return "scripted-chat"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        self.calls.append({"messages": messages, **kwargs})
        if self.error is not None:
            raise self.error

        # Replay in order; the last response repeats
        text = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        message = AIMessage(
            content=text,
            usage_metadata={
                "input_tokens": self.total_tokens,
                "output_tokens": 0,
                "total_tokens": self.total_tokens,
            },
        )
        return ChatResult(generations=[ChatGeneration(message=message)])


class FakeModelClient(ModelClient):
    """ModelClient returning a fixed reply, raising, or stalling."""

    def __init__(
        self,
        text: str = "NOT_FOUND",
        tokens: int = 0,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        model_name: str = "fake-model",
    ):
        self.text = text
        self.tokens = tokens
        self.error = error
        self.delay = delay
        self.model_name = model_name
        self.prompts: List[str] = []
        self.params: List[dict] = []

    def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> ModelReply:
        self.prompts.append(prompt)
        self.params.append({"temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return ModelReply(text=self.text, total_tokens=self.tokens)

    async def acomplete(self, prompt: str, *, temperature: float, max_tokens: int) -> ModelReply:
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.complete(prompt, temperature=temperature, max_tokens=max_tokens)


@pytest.fixture
def make_faq():
    def _make(id, *keywords, question=None, category="Umumiy", answer=None):
        return FAQEntry(
            id=id,
            question=question or f"Savol {id}",
            category=category,
            answer=answer or f"Javob {id}",
            keywords=tuple(keywords),
        )
    return _make


@pytest.fixture
def make_nav():
    def _make(url, *keywords, intent=None):
        return NavigationEntry(url=url, intent=intent or url.strip("/").title(), keywords=tuple(keywords))
    return _make


@pytest.fixture(scope="session")
def site_lexicon() -> Lexicon:
    """The lexicon shipped in data/."""
    return LexiconLoader(
        site_map_path=str(DATA_DIR / "siteMap.json"),
        faq_path=str(DATA_DIR / "faq.json"),
    ).load()


@pytest.fixture
def fake_client():
    return FakeModelClient()


@pytest.fixture
def scripted_llm():
    return ScriptedChatModel(responses=["Marhamat, bu yerga bosing"], total_tokens=12, calls=[])
