"""Tests for the chat history module (models and both backends)."""
import sqlite3
from datetime import datetime, timedelta

import pytest

from thinkmate.history import (
    Attachment,
    ChatHistoryStore,
    ChatSession,
    KeyValueChatHistory,
    Message,
    Role,
    create_chat_history,
    session_id_for,
)
from thinkmate.history.sqlite import SQLiteChatHistory

BASE_TIME = datetime(2025, 3, 1, 9, 0, 0)


def make_session(index: int, *texts: str) -> ChatSession:
    """Session with a welcome message plus the given user texts."""
    moment = BASE_TIME + timedelta(minutes=index)
    messages = [Message(role=Role.MODEL, text="Welcome", timestamp=moment)]
    messages += [Message(role=Role.USER, text=t, timestamp=moment) for t in texts]
    return ChatSession(id=session_id_for(moment), timestamp=moment, messages=messages)


@pytest.fixture(params=["keyvalue", "sqlite"])
async def backend(request, store, tmp_path):
    """Each history backend, connected."""
    if request.param == "keyvalue":
        history = create_chat_history("keyvalue", store=store)
    else:
        history = create_chat_history("sqlite", path=tmp_path / "history.db")
    await history.connect()
    yield history
    await history.disconnect()


class TestModels:
    """Tests for message and session models."""

    def test_attachment_from_path(self, sample_png):
        """Test MIME type guessing and base64 round trip of file content."""
        attachment = Attachment.from_path(sample_png)

        assert attachment.name == "diagram.png"
        assert attachment.mime_type == "image/png"
        assert attachment.kind == "image"
        assert attachment.raw_bytes() == sample_png.read_bytes()

    def test_attachment_kinds(self):
        assert Attachment.from_bytes("notes.pdf", b"%PDF").kind == "document"
        assert Attachment.from_bytes("clip.mp4", b"").kind == "video"
        assert Attachment.from_bytes("memo.wav", b"").kind == "audio"
        assert Attachment.from_bytes("blob", b"").mime_type == "application/octet-stream"

    def test_message_ids_are_unique(self):
        ids = {Message(role=Role.USER, text="hi").id for _ in range(50)}
        assert len(ids) == 50

    def test_session_id_is_epoch_millis(self):
        moment = datetime(2025, 1, 1, 12, 0, 0)
        assert session_id_for(moment) == str(int(moment.timestamp() * 1000))

    def test_preview_of_welcome_only_session(self):
        assert make_session(0).preview().summary == "Empty Chat"
        assert ChatSession().preview().summary == "Empty Chat"

    def test_preview_truncates_last_message(self):
        """Test the summary is the last message cut to 100 chars plus an ellipsis."""
        preview = make_session(0, "x" * 150).preview()

        assert preview.summary == "x" * 100 + "..."
        assert preview.message_count == 2

    def test_store_is_abstract(self):
        with pytest.raises(TypeError):
            ChatHistoryStore()  # type: ignore

    def test_max_sessions_must_be_positive(self, store):
        with pytest.raises(ValueError):
            KeyValueChatHistory(store, max_sessions=0)


class TestHistoryBackends:
    """Behaviour shared by every history backend."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, backend):
        session = make_session(0, "What is osmosis?")
        session.messages[1].attachment = Attachment.from_bytes("cell.png", b"img")
        await backend.save_session(session)

        loaded = await backend.get_session(session.id)
        assert loaded is not None
        assert [m.text for m in loaded.messages] == ["Welcome", "What is osmosis?"]
        assert loaded.messages[1].role == Role.USER
        assert loaded.messages[1].attachment.name == "cell.png"
        assert loaded.messages[1].id == session.messages[1].id

    @pytest.mark.asyncio
    async def test_get_missing_session(self, backend):
        assert await backend.get_session("nope") is None

    @pytest.mark.asyncio
    async def test_save_replaces_existing_session(self, backend):
        """Test saving the same id twice keeps one session with the latest messages."""
        session = make_session(0, "first")
        await backend.save_session(session)
        session.messages.append(Message(role=Role.MODEL, text="reply", timestamp=BASE_TIME))
        await backend.save_session(session)

        sessions = await backend.list_sessions()
        assert len(sessions) == 1
        assert sessions[0].messages[-1].text == "reply"

    @pytest.mark.asyncio
    async def test_previews_newest_first(self, backend):
        for i in range(3):
            await backend.save_session(make_session(i, f"question {i}"))

        previews = await backend.list_previews()
        assert [p.summary for p in previews] == ["question 2...", "question 1...", "question 0..."]

    @pytest.mark.asyncio
    async def test_delete_session(self, backend):
        session = make_session(0, "bye")
        await backend.save_session(session)

        assert await backend.delete_session(session.id)
        assert not await backend.delete_session(session.id)
        assert await backend.list_sessions() == []

    @pytest.mark.asyncio
    async def test_clear(self, backend):
        await backend.save_session(make_session(0))
        await backend.save_session(make_session(1))
        await backend.clear()
        assert await backend.list_sessions() == []


class TestRetention:
    """Tests for the opt-in retention bound."""

    @pytest.mark.asyncio
    async def test_keyvalue_evicts_oldest(self, store):
        history = KeyValueChatHistory(store, max_sessions=2)
        for i in range(4):
            await history.save_session(make_session(i, f"q{i}"))

        ids = [s.id for s in await history.list_sessions()]
        assert ids == [make_session(2).id, make_session(3).id]

    @pytest.mark.asyncio
    async def test_sqlite_evicts_oldest(self, tmp_path):
        async with SQLiteChatHistory(tmp_path / "h.db", max_sessions=2) as history:
            for i in range(4):
                await history.save_session(make_session(i, f"q{i}"))

            ids = [s.id for s in await history.list_sessions()]
            assert ids == [make_session(2).id, make_session(3).id]

    @pytest.mark.asyncio
    async def test_unbounded_by_default(self, store):
        history = KeyValueChatHistory(store)
        for i in range(25):
            await history.save_session(make_session(i))
        assert len(await history.list_sessions()) == 25


class TestKeyValueChatHistory:
    @pytest.mark.asyncio
    async def test_skips_unreadable_entries(self, store):
        """Test a corrupt entry does not hide the valid ones."""
        good = make_session(0, "ok").model_dump(mode="json")
        store.set_json("thinkmate_chat_history", [{"messages": "bad"}, good])

        sessions = await KeyValueChatHistory(store).list_sessions()
        assert [s.id for s in sessions] == [good["id"]]

    @pytest.mark.asyncio
    async def test_clear_removes_key(self, store, history):
        await history.save_session(make_session(0))
        await history.clear()
        assert "thinkmate_chat_history" not in store.keys()


class TestSQLiteChatHistory:
    @pytest.mark.asyncio
    async def test_requires_connection(self, tmp_path):
        history = SQLiteChatHistory(tmp_path / "h.db")
        with pytest.raises(RuntimeError):
            await history.list_sessions()

    @pytest.mark.asyncio
    async def test_persists_across_connections(self, tmp_path):
        path = tmp_path / "h.db"
        session = make_session(0, "remember me")
        async with SQLiteChatHistory(path) as history:
            await history.save_session(session)

        async with SQLiteChatHistory(path) as history:
            loaded = await history.get_session(session.id)
        assert loaded.messages[-1].text == "remember me"
        assert history.backend_type == "sqlite"


    @pytest.mark.asyncio
    async def test_failed_save_is_rolled_back(self, tmp_path, monkeypatch):
        """Test a save that fails midway leaves the stored session untouched."""
        original = make_session(0, "first answer")
        async with SQLiteChatHistory(tmp_path / "h.db") as history:
            await history.save_session(original)

            async def broken_executemany(*args, **kwargs):
                raise sqlite3.OperationalError("disk I/O error")

            conn = history._require_connection()
            monkeypatch.setattr(conn, "executemany", broken_executemany)
            with pytest.raises(sqlite3.OperationalError):
                await history.save_session(make_session(0, "first answer", "second answer"))
            monkeypatch.undo()

            await history.save_session(make_session(1, "other session"))
            loaded = await history.get_session(original.id)

        assert [m.text for m in loaded.messages] == ["Welcome", "first answer"]


class TestHistoryFactory:
    def test_keyvalue_requires_store(self):
        with pytest.raises(TypeError):
            create_chat_history("keyvalue")

    def test_unsupported_backend(self):
        with pytest.raises(ValueError, match="Unsupported history backend"):
            create_chat_history("postgres")
