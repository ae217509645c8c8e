"""Custom Textual widgets for the chat client.

Hides widget implementation details:
- Message rendering and scrolling
- Importance badge styling
- Reflection panel layout and progress
"""

from rich.markup import escape
from textual.containers import Vertical, VerticalScroll
from textual.widgets import ProgressBar, Static

from decision_assistant.domain.models import ChatMessage

IMPORTANCE_CLASSES = {
    "trivial": "importance-trivial",
    "routine": "importance-routine",
    "complex": "importance-complex",
    "life-altering": "importance-life-altering",
}


class ImportanceBadge(Static):
    """Pill showing the current decision importance."""

    def set_importance(self, importance: str, label: str) -> None:
        for css_class in IMPORTANCE_CLASSES.values():
            self.remove_class(css_class)
        self.add_class(IMPORTANCE_CLASSES.get(importance, "importance-unknown"))
        self.update(f"Importance: {label}")


class MessageList(VerticalScroll):
    """Scrollable conversation."""

    BORDER_TITLE = "Decision Assistant"

    def add_message(self, message: ChatMessage) -> None:
        """Render one message and keep the newest in view."""
        role_class = "user-message" if message.role == "user" else "assistant-message"
        prefix = "You" if message.role == "user" else "Assistant"
        widget = Static(
            f"[b]{prefix}[/b]\n{escape(message.content)}",
            classes=f"chat-message {role_class}",
            id=f"message-{message.id}",
        )
        self.mount(widget)
        self.scroll_end(animate=False)


class ReflectionPanel(Vertical):
    """Numbered reflection prompts with a countdown and progress bar."""

    def compose(self):
        yield Static("Let's reflect: consider these points", id="reflection-title")
        yield Static("", id="reflection-prompts")
        yield Static("", id="reflection-remaining")
        yield ProgressBar(total=100, show_eta=False, show_percentage=False, id="reflection-progress")

    def show_prompts(self, prompts: list[str], remaining: int, progress: float) -> None:
        numbered = "\n".join(f"{i}. {escape(prompt)}" for i, prompt in enumerate(prompts, start=1))
        self.query_one("#reflection-prompts", Static).update(numbered)
        self.update_countdown(remaining, progress)
        self.display = True

    def update_countdown(self, remaining: int, progress: float) -> None:
        self.query_one("#reflection-remaining", Static).update(
            f"Reflection time   {remaining}s remaining"
        )
        self.query_one("#reflection-progress", ProgressBar).update(progress=progress)

    def hide(self) -> None:
        self.display = False
