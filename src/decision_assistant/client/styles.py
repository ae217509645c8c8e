"""CSS styles for the chat client.

Keeps layout and colour decisions out of the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#top-bar {
    height: 3;
    padding: 0 1;
    align: right middle;
}

ImportanceBadge {
    width: auto;
    padding: 0 2;
    text-style: bold;
    background: $panel;
    color: $text-muted;

    &.importance-trivial { background: green 20%; color: $success; }
    &.importance-routine { background: blue 20%; color: $primary; }
    &.importance-complex { background: yellow 20%; color: $warning; }
    &.importance-life-altering { background: red 20%; color: $error; }
}

#messages {
    height: 1fr;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0 1;
}

.chat-message {
    margin: 1 0 0 0;
    padding: 0 1;
    max-width: 80%;
}

.user-message {
    background: $primary 30%;
    margin-left: 20;
}

.assistant-message {
    background: $panel;
}

#loading {
    height: 1;
    display: none;

    &.visible {
        display: block;
    }
}

ReflectionPanel {
    height: auto;
    margin: 0 1;
    padding: 0 1;
    border: round $warning;
    background: $warning 10%;
    color: $warning;
    display: none;
}

#reflection-title {
    text-style: bold;
}

#reflection-prompts {
    padding: 0 0 0 2;
}

#reflection-progress {
    width: 100%;
}

#input-bar {
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    min-width: 10;
}
"""
