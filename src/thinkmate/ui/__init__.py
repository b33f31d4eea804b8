"""Terminal UI module for thinkmate.

Provides a Textual-based TUI for ChatController interaction.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (input history, message rendering, status line)
- styles.py: CSS styling (layout decisions, ui-* style variants)
- themes.py: Mapping from derived theme styles to Textual themes
- app.py: Application orchestration (user interaction flow)
"""

from .app import ThinkMateApp, run_textual_tui
from .themes import to_textual_theme
from .widgets import ChatHistoryWidget, ChatInputBar, StatusLine

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "StatusLine",
    "ThinkMateApp",
    "run_textual_tui",
    "to_textual_theme",
]
