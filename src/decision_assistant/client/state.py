"""Chat session state for the terminal client.

Pure state with no I/O or timers of its own, so the reflection rules can be
exercised without a running UI. The app calls ``tick()`` once a second.
"""

from decision_assistant.client.api_client import UNDEFINED_IMPORTANCE, ChatReply
from decision_assistant.domain.models import ChatMessage

WELCOME_MESSAGE = "What decision are you facing?"
ERROR_MESSAGE = "Sorry, I couldn't process your request. Please try again."
IDLE_PLACEHOLDER = "Type a message..."


class ChatSession:
    """Messages, loading flag, and reflection timer for one conversation."""

    def __init__(self) -> None:
        self.messages: list[ChatMessage] = [
            ChatMessage(id="welcome", role="assistant", content=WELCOME_MESSAGE)
        ]
        self.is_loading = False
        self.importance = UNDEFINED_IMPORTANCE
        self.timer_active = False
        self.timer_duration = 0
        self.time_remaining = 0
        self.reflection_prompts: list[str] = []

    # ----- derived state -----

    @property
    def input_enabled(self) -> bool:
        return not (self.is_loading or self.timer_active)

    @property
    def importance_label(self) -> str:
        return "Assessing" if self.importance == UNDEFINED_IMPORTANCE else self.importance

    @property
    def progress(self) -> float:
        """Elapsed share of the reflection period, 0-100."""
        if not self.timer_active or self.timer_duration <= 0:
            return 0.0
        return (self.timer_duration - self.time_remaining) / self.timer_duration * 100

    @property
    def placeholder(self) -> str:
        if self.timer_active:
            return f"Please reflect for {self.time_remaining}s..."
        return IDLE_PLACEHOLDER

    @property
    def show_reflection(self) -> bool:
        return self.timer_active and bool(self.reflection_prompts)

    def can_submit(self, text: str) -> bool:
        return bool(text.strip()) and self.input_enabled

    def history(self) -> list[dict[str, str]]:
        return [message.to_api() for message in self.messages]

    # ----- transitions -----

    def begin_send(self, text: str) -> ChatMessage:
        """Record the user's message and mark a request in flight."""
        if not self.can_submit(text):
            raise RuntimeError("Input is disabled")

        message = ChatMessage(role="user", content=text)
        self.messages.append(message)
        self.is_loading = True
        return message

    def complete(self, reply: ChatReply) -> ChatMessage:
        """Apply a successful reply and start the timer if one was requested."""
        self.importance = reply.importance
        if reply.prompts:
            self.reflection_prompts = list(reply.prompts)

        message = ChatMessage(role="assistant", content=reply.content)
        self.messages.append(message)

        if reply.duration > 0:
            self.timer_duration = reply.duration
            self.time_remaining = reply.duration
            self.timer_active = True

        self.is_loading = False
        return message

    def fail(self) -> ChatMessage:
        message = ChatMessage(role="assistant", content=ERROR_MESSAGE)
        self.messages.append(message)
        self.is_loading = False
        return message

    def tick(self) -> bool:
        """
        Advance the reflection timer by one second.

        Returns:
            True if this tick ended the reflection period
        """
        if not self.timer_active:
            return False

        if self.time_remaining > 0:
            self.time_remaining -= 1

        if self.time_remaining == 0:
            self.timer_active = False
            self.reflection_prompts = []
            return True

        return False
