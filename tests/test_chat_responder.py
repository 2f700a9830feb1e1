"""
Tests for user-facing replies.
"""
from langchain_core.messages import SystemMessage

from nav_assistant.chat import APOLOGY_MESSAGE, NAVIGATION_FALLBACK_MESSAGE, ChatResponder
from nav_assistant.resolution import ResolutionResult, ResolutionType

from conftest import ScriptedChatModel


def navigation_result(make_nav):
    return ResolutionResult(
        type=ResolutionType.NAVIGATION_MATCH,
        navigation=make_nav("/news", "yangiliklar", intent="Yangiliklar"),
        model="keyword-match",
    )


class TestRespond:

    def test_faq_answer_skips_model(self, make_faq, scripted_llm):
        faq = make_faq(1, "narxlar", answer="Narxlar kelishiladi.")
        resolution = ResolutionResult(type=ResolutionType.FAQ_MATCH, faq=faq, model="keyword-match")

        reply = ChatResponder(scripted_llm, "gpt-4o-mini").respond("narxlar", resolution)

        assert reply.message == "Narxlar kelishiladi."
        assert reply.model == "keyword-match"
        assert reply.tokens == 0
        assert scripted_llm.calls == []

    def test_navigation_reply_is_short(self, make_nav):
        llm = ScriptedChatModel(responses=["  Marhamat, bu yerga bosing \n"], total_tokens=12, calls=[])

        reply = ChatResponder(llm, "gpt-4o-mini").respond("yangiliklar", navigation_result(make_nav))

        assert reply.message == "Marhamat, bu yerga bosing"
        assert reply.tokens == 12
        assert reply.model == "gpt-4o-mini"
        assert llm.calls[0]["max_tokens"] == 30
        assert llm.calls[0]["temperature"] == 0.3

        system = llm.calls[0]["messages"][0]
        assert isinstance(system, SystemMessage)
        assert '"Yangiliklar"' in system.content

    def test_not_found_gets_conversational_reply(self, scripted_llm):
        reply = ChatResponder(scripted_llm, "gpt-4o-mini").respond(
            "salom", ResolutionResult(type=ResolutionType.NOT_FOUND)
        )

        assert reply.error is None
        assert scripted_llm.calls[0]["max_tokens"] == 100
        assert "HOZIR" not in scripted_llm.calls[0]["messages"][0].content

    def test_navigation_error_uses_link_text(self, make_nav):
        llm = ScriptedChatModel(error=ConnectionError("down"), calls=[])

        reply = ChatResponder(llm, "gpt-4o-mini").respond("yangiliklar", navigation_result(make_nav))

        assert reply.message == NAVIGATION_FALLBACK_MESSAGE
        assert reply.error == "down"

    def test_chat_error_uses_apology(self):
        llm = ScriptedChatModel(error=ConnectionError("down"), calls=[])

        reply = ChatResponder(llm, "gpt-4o-mini").respond(
            "salom", ResolutionResult(type=ResolutionType.NOT_FOUND)
        )

        assert reply.message == APOLOGY_MESSAGE
        assert reply.error == "down"

    def test_missing_model_uses_canned_reply(self):
        reply = ChatResponder(None, "gpt-4o-mini").respond(
            "salom", ResolutionResult(type=ResolutionType.NOT_FOUND)
        )

        assert reply.message == APOLOGY_MESSAGE
        assert reply.error is not None


class TestTalk:

    def test_general_chat_parameters(self, scripted_llm):
        reply = ChatResponder(scripted_llm, "gpt-4o-mini", company="Ko'prikqurilish").talk("salom")

        assert reply.message == "Marhamat, bu yerga bosing"
        assert scripted_llm.calls[0]["temperature"] == 0.7
        assert scripted_llm.calls[0]["max_tokens"] == 100
        assert "Ko'prikqurilish" in scripted_llm.calls[0]["messages"][0].content
