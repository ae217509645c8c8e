"""Terminal chat client for the decision assistant."""

from decision_assistant.client.api_client import ChatApiClient, ChatApiError, ChatReply
from decision_assistant.client.state import ChatSession

__all__ = [
    "ChatApiClient",
    "ChatApiError",
    "ChatReply",
    "ChatSession",
]
