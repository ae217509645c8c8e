# tests/unit/api/test_chat_route.py
"""Tests for POST /api/chat."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from structlog.testing import capture_logs

from decision_assistant.agent.llm import LLMClient
from decision_assistant.api.dependencies import get_llm_client
from decision_assistant.api.schemas.chat import CHAT_ERROR_MESSAGE
from decision_assistant.domain.exceptions import LLMError, UpstreamTimeout
from decision_assistant.domain.reflection import REFLECTION_PROMPTS
from decision_assistant.domain.models import Importance


@pytest.mark.unit
class TestChatSuccess:
    """Successful replies carry the timer metadata in headers."""

    async def test_returns_reply_as_plain_text(self, async_client, conversation):
        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "It might help to think about your budget constraints here."

    async def test_sets_timer_headers(self, async_client, conversation):
        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.headers["X-Timer-Duration"] == "25"
        assert response.headers["X-Decision-Importance"] == "complex"
        prompts = (
            response.headers["X-Reflection-Prompt-1"],
            response.headers["X-Reflection-Prompt-2"],
        )
        assert prompts in REFLECTION_PROMPTS[Importance.COMPLEX]

    async def test_forwards_conversation_to_model(self, async_client, mock_llm, conversation):
        await async_client.post("/api/chat", json={"messages": conversation})

        reply_call = mock_llm.complete.call_args_list[0]
        assert reply_call.kwargs["messages"][1:] == conversation

    async def test_sets_request_id(self, async_client, conversation):
        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert "X-Request-ID" in response.headers

    async def test_zero_duration(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = ["Go with the blue one.", "importance: trivial\nduration: 0"]

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.headers["X-Timer-Duration"] == "0"
        assert response.headers["X-Decision-Importance"] == "trivial"


@pytest.mark.unit
class TestClassificationFallback:
    """A failed classification still returns the reply."""

    async def test_classifier_error_uses_routine_sixty(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = ["Here is my answer.", LLMError("classifier down")]

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.status_code == 200
        assert response.text == "Here is my answer."
        assert response.headers["X-Timer-Duration"] == "60"
        assert response.headers["X-Decision-Importance"] == "routine"

    async def test_unparseable_answer_uses_defaults(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = ["Here is my answer.", "no idea"]

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.headers["X-Timer-Duration"] == "60"
        assert response.headers["X-Decision-Importance"] == "routine"

    async def test_duration_is_clamped(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = ["Think it over.", "importance: life-altering\nduration: 600"]

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.headers["X-Timer-Duration"] == "240"
        assert response.headers["X-Decision-Importance"] == "life-altering"


@pytest.mark.unit
class TestChatFailure:
    """A failed main completion returns the fixed plain-text 500."""

    async def test_llm_error_returns_generic_message(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = LLMError("provider exploded")

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.status_code == 500
        assert response.text == CHAT_ERROR_MESSAGE
        assert "X-Timer-Duration" not in response.headers
        assert "provider exploded" not in response.text

    async def test_malformed_completion_returns_generic_message(self, app, async_client, conversation):
        openai_client = MagicMock()
        openai_client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(choices=[SimpleNamespace(message=None)])
        )
        openai_client.close = AsyncMock()
        app.dependency_overrides[get_llm_client] = lambda: LLMClient(client=openai_client)

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == CHAT_ERROR_MESSAGE

    async def test_unexpected_client_error_returns_generic_message(self, app, async_client, conversation):
        openai_client = MagicMock()
        openai_client.chat.completions.create = AsyncMock(side_effect=RuntimeError("internal detail"))
        openai_client.close = AsyncMock()
        app.dependency_overrides[get_llm_client] = lambda: LLMClient(client=openai_client)

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.status_code == 500
        assert response.text == CHAT_ERROR_MESSAGE
        assert "internal detail" not in response.text

    async def test_timeout_returns_generic_message(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = UpstreamTimeout()

        response = await async_client.post("/api/chat", json={"messages": conversation})

        assert response.status_code == 500
        assert response.text == CHAT_ERROR_MESSAGE


@pytest.mark.unit
class TestChatValidation:
    """Malformed requests are rejected before any model call."""

    async def test_empty_messages(self, async_client, mock_llm):
        response = await async_client.post("/api/chat", json={"messages": []})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        mock_llm.complete.assert_not_called()

    async def test_missing_messages(self, async_client):
        response = await async_client.post("/api/chat", json={})

        assert response.status_code == 400

    async def test_unknown_role(self, async_client):
        response = await async_client.post(
            "/api/chat",
            json={"messages": [{"role": "robot", "content": "hi"}]},
        )

        assert response.status_code == 400
        fields = [d["field"] for d in response.json()["error"]["details"]]
        assert any("role" in field for field in fields)

    async def test_invalid_json(self, async_client):
        response = await async_client.post(
            "/api/chat",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    async def test_error_body_has_request_id(self, async_client):
        response = await async_client.post("/api/chat", json={"messages": []})

        assert response.json()["request_id"] == response.headers["X-Request-ID"]


def _events(logs: list[dict], name: str) -> list[dict]:
    return [entry for entry in logs if entry["event"] == name]


@pytest.mark.unit
class TestChatLogging:
    """Both fallback paths and the success path leave a log event."""

    async def test_main_completion_failure_is_logged(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = LLMError("provider exploded")

        with capture_logs() as logs:
            await async_client.post("/api/chat", json={"messages": conversation})

        (event,) = _events(logs, "chat_completion_failed")
        assert event["log_level"] == "error"
        assert event["error_type"] == "LLMError"
        assert "provider exploded" in event["error"]

    async def test_classification_failure_is_logged(self, async_client, mock_llm, conversation):
        mock_llm.complete.side_effect = ["Here is my answer.", LLMError("classifier down")]

        with capture_logs() as logs:
            await async_client.post("/api/chat", json={"messages": conversation})

        (event,) = _events(logs, "classification_failed")
        assert event["log_level"] == "error"
        assert event["importance"] == "routine"
        assert event["duration"] == 60
        assert _events(logs, "chat_completion_failed") == []

    async def test_successful_reply_is_logged(self, async_client, conversation):
        with capture_logs() as logs:
            await async_client.post("/api/chat", json={"messages": conversation})

        (classified,) = _events(logs, "decision_classified")
        assert classified["importance"] == "complex"
        assert classified["duration"] == 25
        (ready,) = _events(logs, "chat_reply_ready")
        assert ready["reply_length"] == len("It might help to think about your budget constraints here.")
