"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering per role
- Status line formatting
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, Static, TextArea

from ..history.models import Attachment, Message, Role

ROLE_LABELS = {
    Role.USER: ("You", "user-message"),
    Role.MODEL: ("ThinkMate", "model-message"),
    Role.SYSTEM: ("System", "system-message"),
}


class ClickableMessage(Vertical):
    """A chat message container that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(TextualMessage):
        """Posted when the user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Terminals do not report modifiers with Enter, so ctrl+j submits.
        """
        if event.key == "ctrl+j":
            self._submit()
        elif event.key == "up" and self._text_area.cursor_location == (0, 0):
            self._recall(-1)
        elif event.key == "down" and self._at_end():
            self._recall(1)
        else:
            return
        event.prevent_default()
        event.stop()

    @property
    def _text_area(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def _at_end(self) -> bool:
        lines = self._text_area.text.split("\n")
        return self._text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _recall(self, direction: int) -> None:
        if not self._history:
            return
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        elif self._history_index < len(self._history) - 1:
            self._history_index += 1
        else:
            self._history_index = -1
            self._text_area.text = ""
            return
        self._text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        value = self._text_area.text.strip()
        if not value:
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
        self._history_index = -1
        self._text_area.text = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        self._text_area.focus()


class StatusLine(Static):
    """One-line status showing the pending attachment and request state."""

    def show_state(self, attachment: Attachment | None, busy: bool) -> None:
        parts = []
        if busy:
            parts.append("ThinkMate is thinking...")
        if attachment is not None:
            parts.append(f"📎 {attachment.name} ({attachment.kind})  /detach to remove")
        if not parts:
            parts.append("Ctrl+J send · /attach <path> · /speak · /help")
        self.set_class(busy, "busy")
        self.update(" | ".join(parts))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat transcript rendered from the controller's messages."""

    BORDER_TITLE = "ThinkMate"
    BORDER_SUBTITLE = "New chat"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []

    def show_messages(self, messages: list[Message]) -> None:
        """Re-render the transcript from a full message list."""
        self._messages = list(messages)
        self.remove_children()
        for message in self._messages:
            self.mount(self._render_message(message))
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def _render_message(self, message: Message) -> ClickableMessage:
        label, role_class = ROLE_LABELS[message.role]
        header = f"{label} [{message.timestamp.strftime('%H:%M')}]"

        container = ClickableMessage(content=message.text, classes=f"chat-message {role_class}")
        container.compose_add_child(Static(header, classes="message-header", markup=False))
        if message.attachment is not None:
            container.compose_add_child(
                Static(f"📎 {message.attachment.name}", classes="message-attachment", markup=False)
            )
        if message.role == Role.MODEL:
            container.compose_add_child(Markdown(message.text, classes="message-content"))
        elif message.text:
            container.compose_add_child(Static(message.text, classes="message-content", markup=False))
        return container
