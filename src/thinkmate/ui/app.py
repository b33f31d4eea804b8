"""Main Textual TUI application.

Orchestrates the UI components and wires user input to the ChatController.
Theme changes from the ThemeManager are reflected live.
"""

import shlex
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..ai.audio import pcm_to_wav
from ..chat import SAMPLE_QUESTIONS, ChatController
from ..config import APP_NAME
from ..theme import ThemeManager, ThemeStyle
from ..theme.style import UI_STYLE_CLASSES
from .styles import APP_CSS
from .themes import theme_name, to_textual_theme, ui_style_class
from .widgets import ChatHistoryWidget, ChatInputBar, StatusLine

HELP_TEXT = """Commands:
/attach <path>   attach a file to the next message
/detach          drop the pending attachment
/speak           read the last reply aloud (saved as WAV)
/color <name>    switch colour theme
/style <name>    switch UI style
/help            show this help

Try: """ + " · ".join(SAMPLE_QUESTIONS[:3])


class ThinkMateApp(App):
    """Textual TUI for ThinkMate chat."""

    CSS = APP_CSS
    TITLE = APP_NAME

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_dark", "Dark Mode"),
        Binding("ctrl+r", "copy_last_reply", "Copy Reply"),
        Binding("ctrl+d", "detach", "Detach"),
    ]

    def __init__(
        self,
        controller: ChatController,
        themes: ThemeManager,
        audio_dir: str | Path = ".",
    ):
        super().__init__()
        self.controller = controller
        self.themes = themes
        self.audio_dir = Path(audio_dir)

    def compose(self) -> ComposeResult:
        yield Header()
        yield ChatHistoryWidget(id="chat-history")
        yield StatusLine(id="status-line")
        yield ChatInputBar()
        yield Footer()

    def on_mount(self) -> None:
        self.apply_style(self.themes.style)
        self.themes.subscribe(self.apply_style)
        self.controller.subscribe(self._show_messages)
        self._show_messages(self.controller.messages)
        self.sub_title = f"Session {self.controller.session_id}"

    def apply_style(self, style: ThemeStyle) -> None:
        """Register and activate the Textual theme for a derived style."""
        self.register_theme(to_textual_theme(style))
        self.theme = theme_name(style)
        self.screen.remove_class(*UI_STYLE_CLASSES)
        self.screen.add_class(ui_style_class(style))

    def _show_messages(self, messages) -> None:
        self.query_one(ChatHistoryWidget).show_messages(messages)
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.query_one(StatusLine).show_state(self.controller.attachment, self.controller.is_loading)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        value = event.value
        if value.startswith("/"):
            self._run_command(value)
        elif self.controller.is_loading:
            self.notify("Please wait for the current reply", severity="warning")
        else:
            self._send(value)

    def _run_command(self, line: str) -> None:
        try:
            command, *args = shlex.split(line)
        except ValueError as e:
            self.notify(str(e), severity="error")
            return

        if command == "/attach" and args:
            try:
                attachment = self.controller.attach_file(" ".join(args))
            except OSError as e:
                self.notify(f"Cannot attach: {e}", severity="error", timeout=5)
                return
            self.notify(f"Attached {attachment.name}", timeout=2)
        elif command == "/detach":
            self.action_detach()
        elif command == "/speak":
            self._speak()
        elif command == "/color" and args:
            self._set_theme(self.themes.set_color_theme, args[0])
        elif command == "/style" and args:
            self._set_theme(self.themes.set_ui_style, args[0])
        elif command == "/help":
            self.notify(HELP_TEXT, timeout=10)
        else:
            self.notify(f"Unknown command: {line}", severity="warning")
        self._refresh_status()

    def _set_theme(self, setter, value: str) -> None:
        try:
            setter(value)
        except ValueError:
            self.notify(f"Unknown option: {value}", severity="error")

    @work(exclusive=True, group="chat")
    async def _send(self, text: str) -> None:
        """Send a message in the background so the UI stays responsive."""
        self.query_one(StatusLine).show_state(self.controller.attachment, True)
        await self.controller.send_message(text)
        self._refresh_status()

    @work(exclusive=True, group="speech")
    async def _speak(self) -> None:
        reply = self.controller.last_reply()
        if reply is None:
            self.notify("No reply to read", severity="warning")
            return
        pcm = await self.controller.read_aloud(reply.id)
        if pcm is None:
            self.notify("Speech generation failed", severity="error")
            return
        self.audio_dir.mkdir(parents=True, exist_ok=True)
        path = self.audio_dir / f"reply-{reply.id[:8]}.wav"
        path.write_bytes(pcm_to_wav(pcm))
        self.notify(f"Saved audio to {path}", timeout=5)

    def action_toggle_dark(self) -> None:
        preference = self.themes.toggle_dark_mode()
        self.notify(f"Dark mode {'on' if preference.is_dark_mode else 'off'}", timeout=2)

    def action_detach(self) -> None:
        self.controller.clear_attachment()
        self._refresh_status()

    def action_copy_last_reply(self) -> None:
        reply = self.controller.last_reply()
        if reply:
            self.copy_to_clipboard(reply.text)
            self.notify("Reply copied", timeout=2)
        else:
            self.notify("No reply to copy", severity="warning")


async def run_textual_tui(
    controller: ChatController,
    themes: ThemeManager,
    audio_dir: str | Path = ".",
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Chat view-model for the session
        themes: Theme manager holding the stored preference
        audio_dir: Where read-aloud WAV files are written
    """
    app = ThinkMateApp(controller=controller, themes=themes, audio_dir=audio_dir)
    await app.run_async()
