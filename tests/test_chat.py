"""Tests for the chat view-model."""
import pytest
from conftest import inline_response, text_response

from thinkmate.chat import (
    CONNECTION_ERROR_TEXT,
    VOICE_PLACEHOLDER_TEXT,
    WELCOME_TEXT,
    ChatController,
)
from thinkmate.errors import StorageError
from thinkmate.history import Attachment, ChatSession, KeyValueChatHistory, Message, Role


@pytest.fixture
def controller(gemini, history):
    return ChatController(gemini, history)


class FailingHistory(KeyValueChatHistory):
    async def save_session(self, session):
        raise StorageError("disk full")


class TestChatController:
    """Tests for sending messages and the resulting message list."""

    def test_starts_with_welcome(self, controller):
        messages = controller.messages
        assert len(messages) == 1
        assert messages[0].role == Role.MODEL
        assert messages[0].text == WELCOME_TEXT
        assert not controller.is_loading

    @pytest.mark.asyncio
    async def test_blank_message_is_noop(self, controller, fake_client):
        """Test empty text with no attachment sends nothing."""
        assert await controller.send_message("   ") is None
        assert await controller.send_message(None) is None

        assert len(controller.messages) == 1
        assert fake_client.models.calls == []

    @pytest.mark.asyncio
    async def test_success_appends_one_model_message(self, controller, fake_client):
        fake_client.models.responses.append(text_response("Photosynthesis turns light into sugar."))
        reply = await controller.send_message("Explain photosynthesis")

        messages = controller.messages
        assert [m.role for m in messages] == [Role.MODEL, Role.USER, Role.MODEL]
        assert messages[1].text == "Explain photosynthesis"
        assert reply is messages[-1]
        assert reply.text == "Photosynthesis turns light into sugar."
        assert not controller.is_loading

    @pytest.mark.asyncio
    async def test_failure_appends_one_system_message(self, controller, fake_client):
        fake_client.models.error = RuntimeError("offline")
        reply = await controller.send_message("Hello?")

        messages = controller.messages
        assert [m.role for m in messages] == [Role.MODEL, Role.USER, Role.SYSTEM]
        assert reply.text == CONNECTION_ERROR_TEXT
        assert not controller.is_loading

    @pytest.mark.asyncio
    async def test_undecodable_attachment_appends_one_system_message(self, controller, fake_client):
        """Test a broken attachment payload is reported like any failed call."""
        controller.attach(Attachment(name="notes.pdf", mime_type="application/pdf", data="abc"))
        reply = await controller.send_message("Summarize this")

        messages = controller.messages
        assert [m.role for m in messages] == [Role.MODEL, Role.USER, Role.SYSTEM]
        assert reply.text == CONNECTION_ERROR_TEXT
        assert fake_client.models.calls == []
        assert not controller.is_loading

    @pytest.mark.asyncio
    async def test_history_excludes_current_message(self, controller, fake_client):
        """Test prior messages become context and the new text is the request."""
        await controller.send_message("First")
        await controller.send_message("Second")

        prompt = fake_client.models.prompt_text()
        assert prompt.endswith("Current Request:\nSecond")
        assert "Student: First" in prompt
        assert prompt.count("Second") == 1

    @pytest.mark.asyncio
    async def test_attachment_is_sent_once(self, controller, fake_client, sample_png):
        attachment = controller.attach_file(sample_png)
        assert controller.attachment == attachment

        await controller.send_message("")
        user_message = controller.messages[1]
        assert user_message.attachment == attachment
        assert controller.attachment is None
        assert fake_client.models.calls[0]["contents"].parts[0].inline_data is not None

        await controller.send_message("And now?")
        assert fake_client.models.calls[1]["contents"].parts[0].inline_data is None

    def test_attach_replaces_previous(self, controller):
        controller.attach(Attachment.from_bytes("a.pdf", b"a"))
        controller.attach(Attachment.from_bytes("b.pdf", b"b"))
        assert controller.attachment.name == "b.pdf"
        controller.clear_attachment()
        assert controller.attachment is None

    @pytest.mark.asyncio
    async def test_session_is_persisted(self, controller, history):
        await controller.send_message("Save me")

        stored = await history.get_session(controller.session_id)
        assert [m.text for m in stored.messages][-2] == "Save me"
        assert len(stored.messages) == 3

    @pytest.mark.asyncio
    async def test_persist_failure_is_not_raised(self, gemini, store):
        controller = ChatController(gemini, FailingHistory(store))
        reply = await controller.send_message("Still works")
        assert reply.role == Role.MODEL

    @pytest.mark.asyncio
    async def test_listeners_see_every_change(self, controller):
        seen = []
        controller.subscribe(lambda messages: seen.append(len(messages)))
        await controller.send_message("Hi")
        assert seen == [2, 3]

    @pytest.mark.asyncio
    async def test_resume_keeps_id_and_messages(self, gemini, history):
        session = ChatSession(
            id="123",
            messages=[Message(role=Role.USER, text="old"), Message(role=Role.MODEL, text="reply")],
        )
        controller = ChatController.resume(gemini, session, history)

        assert controller.session_id == "123"
        assert [m.text for m in controller.messages] == ["old", "reply"]
        assert controller.last_reply().text == "reply"


class TestVoiceNotes:
    """Tests for voice-note transcription flow."""

    @pytest.mark.asyncio
    async def test_transcription_replaces_placeholder(self, controller, fake_client):
        fake_client.models.responses += [text_response("what is an atom"), text_response("An atom is...")]
        seen = []
        controller.subscribe(lambda messages: seen.append(messages[1].text))

        reply = await controller.send_voice_note(b"RIFF....", "audio/webm")

        messages = controller.messages
        assert seen[0] == VOICE_PLACEHOLDER_TEXT
        assert messages[1].text == '🎤 "what is an atom"'
        assert reply.text == "An atom is..."
        assert fake_client.models.prompt_text().endswith("what is an atom")

    @pytest.mark.asyncio
    async def test_empty_transcription_sends_nothing(self, controller, fake_client):
        fake_client.models.responses.append(text_response("   "))
        assert await controller.send_voice_note(b"RIFF") is None

        assert len(fake_client.models.calls) == 1
        assert len(controller.messages) == 2


class TestReadAloud:
    @pytest.mark.asyncio
    async def test_unknown_message(self, controller):
        assert await controller.read_aloud("missing") is None

    @pytest.mark.asyncio
    async def test_returns_pcm(self, controller, fake_client):
        fake_client.models.responses.append(inline_response(b"\x00\x00"))
        welcome = controller.messages[0]
        assert await controller.read_aloud(welcome.id) == b"\x00\x00"
