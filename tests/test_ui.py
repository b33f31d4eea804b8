"""Tests for the Textual TUI."""
import pytest
from conftest import text_response

from thinkmate.chat import ChatController
from thinkmate.theme import ThemeColor, ThemeManager, ThemePreference, derive_theme_style
from thinkmate.theme.presets import THEME_PRESETS
from thinkmate.ui import ChatHistoryWidget, ChatInputBar, ThinkMateApp, to_textual_theme
from thinkmate.ui.themes import theme_name


@pytest.fixture
def tui(gemini, store, history, tmp_path):
    controller = ChatController(gemini, history)
    return ThinkMateApp(controller, ThemeManager(store), audio_dir=tmp_path / "audio")


class TestTextualTheme:
    def test_maps_palette(self):
        style = derive_theme_style(ThemePreference(color_theme=ThemeColor.GREEN))
        theme = to_textual_theme(style)

        assert theme.primary == THEME_PRESETS[ThemeColor.GREEN].primary
        assert not theme.dark
        assert theme.name == theme_name(style)

    def test_neon_is_dark(self):
        theme = to_textual_theme(derive_theme_style(ThemePreference(color_theme=ThemeColor.NEON)))
        assert theme.dark


class TestThinkMateApp:
    @pytest.mark.asyncio
    async def test_toggle_dark_mode(self, tui):
        async with tui.run_test() as pilot:
            assert not tui.current_theme.dark
            tui.action_toggle_dark()
            await pilot.pause()

            assert tui.themes.preference.is_dark_mode
            assert tui.current_theme.dark

    @pytest.mark.asyncio
    async def test_ui_style_class_on_screen(self, tui):
        async with tui.run_test() as pilot:
            assert tui.screen.has_class("ui-standard")
            tui.themes.set_ui_style("neon")
            await pilot.pause()

            assert tui.screen.has_class("ui-neon")
            assert not tui.screen.has_class("ui-standard")

    @pytest.mark.asyncio
    async def test_send_message_renders_reply(self, tui, fake_client):
        fake_client.models.responses.append(text_response("Here is the answer."))
        async with tui.run_test() as pilot:
            tui.on_chat_input_bar_submitted(ChatInputBar.Submitted("Help me"))
            await tui.workers.wait_for_complete()
            await pilot.pause()

            assert [m.text for m in tui.controller.messages][-1] == "Here is the answer."
            assert len(tui.query_one(ChatHistoryWidget).children) == 3

    @pytest.mark.asyncio
    async def test_attach_command(self, tui, sample_png):
        async with tui.run_test() as pilot:
            tui.on_chat_input_bar_submitted(ChatInputBar.Submitted(f"/attach {sample_png}"))
            await pilot.pause()
            assert tui.controller.attachment.name == "diagram.png"

            tui.on_chat_input_bar_submitted(ChatInputBar.Submitted("/detach"))
            assert tui.controller.attachment is None
