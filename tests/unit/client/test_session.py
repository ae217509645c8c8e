# tests/unit/client/test_session.py
"""Unit tests for ChatSession, the client's conversation and timer state."""

import pytest

from decision_assistant.client.api_client import ChatReply
from decision_assistant.client.state import (
    ERROR_MESSAGE,
    IDLE_PLACEHOLDER,
    WELCOME_MESSAGE,
    ChatSession,
)

PROMPTS = ["Consider your gut feeling.", "Think about tomorrow."]


@pytest.fixture
def session() -> ChatSession:
    return ChatSession()


def reply(duration: int = 3, prompts=None, importance: str = "routine") -> ChatReply:
    return ChatReply(
        content="Have you weighed the costs?",
        duration=duration,
        prompts=list(PROMPTS) if prompts is None else prompts,
        importance=importance,
    )


@pytest.mark.unit
class TestInitialState:

    def test_starts_with_welcome(self, session):
        assert len(session.messages) == 1
        assert session.messages[0].role == "assistant"
        assert session.messages[0].content == WELCOME_MESSAGE

    def test_input_enabled(self, session):
        assert session.input_enabled is True
        assert session.placeholder == IDLE_PLACEHOLDER

    def test_importance_is_assessing(self, session):
        assert session.importance_label == "Assessing"

    def test_history_includes_welcome(self, session):
        assert session.history() == [{"role": "assistant", "content": WELCOME_MESSAGE}]


@pytest.mark.unit
class TestSending:

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_text_cannot_be_submitted(self, session, text):
        assert session.can_submit(text) is False

    def test_begin_send_appends_and_locks(self, session):
        message = session.begin_send("Should I move?")

        assert message.role == "user"
        assert session.messages[-1] is message
        assert session.is_loading is True
        assert session.input_enabled is False
        assert session.can_submit("another") is False

    def test_begin_send_while_loading_raises(self, session):
        session.begin_send("first")

        with pytest.raises(RuntimeError):
            session.begin_send("second")

    def test_history_is_oldest_first(self, session):
        session.begin_send("Should I move?")

        assert [m["role"] for m in session.history()] == ["assistant", "user"]

    def test_fail_appends_error_and_unlocks(self, session):
        session.begin_send("hello")

        message = session.fail()

        assert message.content == ERROR_MESSAGE
        assert session.is_loading is False
        assert session.input_enabled is True
        assert session.timer_active is False


@pytest.mark.unit
class TestReflectionTimer:

    def test_complete_starts_timer(self, session):
        session.begin_send("hello")

        session.complete(reply(duration=3, importance="complex"))

        assert session.timer_active is True
        assert session.time_remaining == 3
        assert session.importance_label == "complex"
        assert session.input_enabled is False
        assert session.show_reflection is True
        assert session.placeholder == "Please reflect for 3s..."

    def test_zero_duration_keeps_input_enabled(self, session):
        session.begin_send("hello")

        session.complete(reply(duration=0))

        assert session.timer_active is False
        assert session.input_enabled is True

    def test_tick_counts_down(self, session):
        session.begin_send("hello")
        session.complete(reply(duration=3))

        assert session.tick() is False
        assert session.time_remaining == 2
        assert session.placeholder == "Please reflect for 2s..."

    def test_reaching_zero_clears_prompts_and_enables_input(self, session):
        session.begin_send("hello")
        session.complete(reply(duration=2))

        session.tick()
        ended = session.tick()

        assert ended is True
        assert session.timer_active is False
        assert session.reflection_prompts == []
        assert session.show_reflection is False
        assert session.input_enabled is True
        assert session.placeholder == IDLE_PLACEHOLDER

    def test_tick_when_idle_is_noop(self, session):
        assert session.tick() is False
        assert session.time_remaining == 0

    def test_progress(self, session):
        session.begin_send("hello")
        session.complete(reply(duration=4))

        assert session.progress == 0.0
        session.tick()
        assert session.progress == 25.0

    def test_reply_without_prompts_hides_panel(self, session):
        session.begin_send("hello")

        session.complete(reply(duration=5, prompts=[]))

        assert session.timer_active is True
        assert session.show_reflection is False
