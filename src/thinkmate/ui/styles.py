"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Colours come from the active Textual theme built from the user's
preference; ui-* classes on the screen select the overall treatment.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $primary;
    }
}

/* ============================================
   Status Line - attachment and request state
   ============================================ */
#status-line {
    height: 1;
    padding: 0 2;
    background: $surface;
    color: $text-muted;

    &.busy {
        color: $warning;
        text-style: bold;
    }
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:focus {
        background: transparent;
    }
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $primary;
    background: $primary;
    color: $background;
    text-style: bold;

    &:hover {
        background: $primary-lighten-1;
        border: tall $primary-lighten-1;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    border: none;
    background: transparent;
}

.user-message {
    border-left: tall $primary;
    background: $primary 8%;

    & .message-header {
        color: $primary;
        text-style: bold;
    }
}

.model-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.system-message {
    border-left: tall $error;
    background: $error 8%;

    & .message-header {
        color: $error;
        text-style: bold;
    }
}

.message-header {
    height: auto;
    padding: 0;
}

.message-content {
    height: auto;
    padding: 0;
    margin: 0;
    color: $foreground;
}

.message-attachment {
    height: auto;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   UI Style Variants
   ============================================ */
Screen.ui-minimal #chat-history {
    border: none;
    padding: 0 2;
}

Screen.ui-minimal .chat-message {
    background: transparent;
}

Screen.ui-glass #chat-history {
    background: $panel 60%;
    border: round $foreground 20%;
}

Screen.ui-neon #chat-history {
    border: heavy $primary;
}

Screen.ui-neon .chat-message {
    border-left: thick $primary;
}
"""
