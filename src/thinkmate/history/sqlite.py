"""SQLite chat history backend.

Provides persistent chat history using a SQLite database.
Uses aiosqlite for async access.
"""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from .base import ChatHistoryStore
from .models import Attachment, ChatSession, Message, Role


class SQLiteChatHistory(ChatHistoryStore):
    """SQLite-backed chat history.

    Stores sessions and their messages in two tables. Saving a session
    rewrites its message rows.
    """

    def __init__(
        self,
        path: str | Path = "./thinkmate_history.db",
        max_sessions: int | None = None,
    ):
        super().__init__(max_sessions)
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        if self._connection is not None:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                session_id TEXT PRIMARY KEY,
                timestamp TEXT NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                message_id TEXT NOT NULL,
                role TEXT NOT NULL,
                text TEXT NOT NULL,
                attachment TEXT,
                timestamp TEXT NOT NULL,
                FOREIGN KEY (session_id) REFERENCES sessions(session_id) ON DELETE CASCADE
            )
        """)

        await self._connection.execute("""
            CREATE INDEX IF NOT EXISTS idx_messages_session
            ON messages(session_id, position)
        """)

        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("SQLiteChatHistory is not connected; call connect() first")
        return self._connection

    async def save_session(self, session: ChatSession) -> None:
        """Insert or replace a session and its messages."""
        conn = self._require_connection()

        try:
            await conn.execute("""
                INSERT INTO sessions (session_id, timestamp)
                VALUES (?, ?)
                ON CONFLICT(session_id) DO UPDATE SET timestamp = excluded.timestamp
            """, (session.id, session.timestamp.isoformat()))

            await conn.execute(
                "DELETE FROM messages WHERE session_id = ?",
                (session.id,)
            )

            await conn.executemany("""
                INSERT INTO messages
                (session_id, position, message_id, role, text, attachment, timestamp)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [
                (
                    session.id,
                    position,
                    message.id,
                    message.role.value,
                    message.text,
                    message.attachment.model_dump_json() if message.attachment else None,
                    message.timestamp.isoformat(),
                )
                for position, message in enumerate(session.messages)
            ])

            if self._max_sessions is not None:
                await conn.execute("""
                    DELETE FROM sessions WHERE session_id NOT IN (
                        SELECT session_id FROM sessions
                        ORDER BY timestamp DESC
                        LIMIT ?
                    )
                """, (self._max_sessions,))

            await conn.commit()
        except Exception:
            await conn.rollback()
            raise

    async def _load_messages(self, session_id: str) -> list[Message]:
        conn = self._require_connection()
        async with conn.execute(
            """
            SELECT message_id, role, text, attachment, timestamp
            FROM messages
            WHERE session_id = ?
            ORDER BY position ASC
            """,
            (session_id,)
        ) as cursor:
            rows = await cursor.fetchall()

        messages = []
        for message_id, role, text, attachment_json, ts in rows:
            attachment = None
            if attachment_json:
                attachment = Attachment.model_validate(json.loads(attachment_json))
            messages.append(Message(
                id=message_id,
                role=Role(role),
                text=text,
                attachment=attachment,
                timestamp=datetime.fromisoformat(ts),
            ))
        return messages

    async def get_session(self, session_id: str) -> ChatSession | None:
        conn = self._require_connection()
        async with conn.execute(
            "SELECT session_id, timestamp FROM sessions WHERE session_id = ?",
            (session_id,)
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None

        sid, ts = row
        return ChatSession(
            id=sid,
            timestamp=datetime.fromisoformat(ts),
            messages=await self._load_messages(sid),
        )

    async def list_sessions(self) -> list[ChatSession]:
        conn = self._require_connection()
        async with conn.execute(
            "SELECT session_id, timestamp FROM sessions ORDER BY timestamp ASC, rowid ASC"
        ) as cursor:
            rows = await cursor.fetchall()

        sessions = []
        for sid, ts in rows:
            sessions.append(ChatSession(
                id=sid,
                timestamp=datetime.fromisoformat(ts),
                messages=await self._load_messages(sid),
            ))
        return sessions

    async def delete_session(self, session_id: str) -> bool:
        conn = self._require_connection()
        cursor = await conn.execute(
            "DELETE FROM sessions WHERE session_id = ?",
            (session_id,)
        )
        await conn.commit()
        return cursor.rowcount > 0

    async def clear(self) -> None:
        conn = self._require_connection()
        await conn.execute("DELETE FROM sessions")
        await conn.commit()

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
