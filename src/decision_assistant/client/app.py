"""Textual chat client.

Renders the conversation, drives the reflection countdown from the
server-supplied duration, and keeps input disabled until it runs out.
"""

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Footer, Header, Input, LoadingIndicator

from decision_assistant.client.api_client import ChatApiClient, ChatApiError
from decision_assistant.client.state import IDLE_PLACEHOLDER, ChatSession
from decision_assistant.client.styles import APP_CSS
from decision_assistant.client.widgets import ImportanceBadge, MessageList, ReflectionPanel
from decision_assistant.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class DecisionChatApp(App):
    """Single-screen chat with a mandatory reflection timer."""

    CSS = APP_CSS
    TITLE = "Decision Assistant"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, api: ChatApiClient, tick_interval: float = 1.0) -> None:
        super().__init__()
        self._api = api
        self._tick_interval = tick_interval
        self.session = ChatSession()

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="top-bar"):
            yield ImportanceBadge(id="importance")
        yield MessageList(id="messages")
        yield LoadingIndicator(id="loading")
        yield ReflectionPanel(id="reflection")
        with Horizontal(id="input-bar"):
            yield Input(placeholder=IDLE_PLACEHOLDER, id="chat-input")
            yield Button("Send", id="send-btn", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        message_list = self.query_one("#messages", MessageList)
        for message in self.session.messages:
            message_list.add_message(message)

        self._refresh()
        self.set_interval(self._tick_interval, self.tick)
        self.query_one("#chat-input", Input).focus()

    async def on_unmount(self) -> None:
        await self._api.close()

    # ----- events -----

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.query_one("#send-btn", Button).disabled = not self.session.can_submit(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    # ----- behaviour -----

    def _submit(self) -> None:
        chat_input = self.query_one("#chat-input", Input)
        text = chat_input.value
        if not self.session.can_submit(text):
            return

        message = self.session.begin_send(text)
        chat_input.value = ""
        self.query_one("#messages", MessageList).add_message(message)
        self._refresh()
        self.send_history(self.session.history())

    @work(exclusive=True)
    async def send_history(self, history: list[dict[str, str]]) -> None:
        try:
            reply = await self._api.send(history)
        except ChatApiError as e:
            logger.error("chat_request_failed", error=str(e))
            message = self.session.fail()
        except Exception as e:
            logger.exception("chat_request_crashed", error=str(e), error_type=type(e).__name__)
            message = self.session.fail()
        else:
            message = self.session.complete(reply)
            if reply.duration > 0:
                logger.info("reflection_started", duration=reply.duration, importance=reply.importance)

        self.query_one("#messages", MessageList).add_message(message)
        self._refresh()

    def tick(self) -> None:
        """One second of reflection has passed."""
        if not self.session.timer_active:
            return
        self.session.tick()
        self._refresh()

    def _refresh(self) -> None:
        session = self.session

        self.query_one("#importance", ImportanceBadge).set_importance(
            session.importance, session.importance_label
        )
        self.query_one("#loading", LoadingIndicator).set_class(session.is_loading, "visible")

        panel = self.query_one("#reflection", ReflectionPanel)
        if session.show_reflection:
            panel.show_prompts(session.reflection_prompts, session.time_remaining, session.progress)
        else:
            panel.hide()

        chat_input = self.query_one("#chat-input", Input)
        was_disabled = chat_input.disabled
        chat_input.disabled = not session.input_enabled
        chat_input.placeholder = session.placeholder
        self.query_one("#send-btn", Button).disabled = not session.can_submit(chat_input.value)

        if was_disabled and not chat_input.disabled:
            chat_input.focus()
