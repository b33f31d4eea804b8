"""Provider factory functions for CLI.

Centralizes creation of stores, history backends, managers and the AI
service from environment variables. Hides configuration details from
command implementations.
"""

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..ai import AIService, create_ai_service
from ..auth import AuthManager
from ..config import CHAT_MODEL
from ..history import ChatHistoryStore, create_chat_history
from ..storage import KeyValueStore, create_store
from ..theme import ThemeManager

# Default console for output
_console = Console()


def setup_logging(level: str | None = None) -> None:
    """Route library logging through rich.

    Environment variables:
        THINKMATE_LOG_LEVEL: Log level name (default: WARNING)
    """
    level_name = (level or os.getenv("THINKMATE_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def get_data_dir() -> Path:
    """Directory holding the store and history files.

    Environment variables:
        THINKMATE_DATA_DIR: Data directory (default: ~/.thinkmate)
    """
    path = Path(os.getenv("THINKMATE_DATA_DIR", "~/.thinkmate")).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_store() -> KeyValueStore:
    """Create the key-value store from environment variables.

    Environment variables:
        THINKMATE_STORE: Backend type (json or memory; default: json)
    """
    backend = os.getenv("THINKMATE_STORE", "json").lower()
    if backend == "json":
        return create_store("json", path=get_data_dir() / "store.json")
    return create_store(backend)


def _max_sessions() -> int | None:
    value = os.getenv("THINKMATE_MAX_SESSIONS")
    return int(value) if value else None


def get_history(store: KeyValueStore | None = None) -> ChatHistoryStore:
    """Create the chat history backend from environment variables.

    Args:
        store: Key-value store for the keyvalue backend (created if omitted)

    Returns:
        Unconnected chat history backend

    Environment variables:
        THINKMATE_HISTORY: Backend type (keyvalue or sqlite; default: keyvalue)
        THINKMATE_MAX_SESSIONS: Keep only the newest N sessions (default: unbounded)
    """
    backend = os.getenv("THINKMATE_HISTORY", "keyvalue").lower()
    if backend == "sqlite":
        return create_chat_history(
            "sqlite",
            path=get_data_dir() / "history.db",
            max_sessions=_max_sessions(),
        )
    return create_chat_history(
        backend,
        store=store or get_store(),
        max_sessions=_max_sessions(),
    )


def get_theme_manager(store: KeyValueStore | None = None) -> ThemeManager:
    return ThemeManager(store or get_store())


def get_auth_manager(store: KeyValueStore | None = None) -> AuthManager:
    return AuthManager(store or get_store())


def get_ai_service(console: Console | None = None) -> AIService | None:
    """Create the AI service from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        AI service instance, or None if not configured

    Environment variables:
        GEMINI_API_KEY: Gemini API key (falls back to API_KEY)
        GEMINI_MODEL: Chat model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set, AI features disabled[/yellow]")
        return None
    model = os.getenv("GEMINI_MODEL", CHAT_MODEL)
    return create_ai_service("gemini", api_key=api_key, model=model)


def require_ai_service(console: Console | None = None) -> AIService:
    """Get the AI service, exiting if it is not configured.

    Raises:
        typer.Exit: If no API key is configured
    """
    con = console or _console
    service = get_ai_service(con)
    if not service:
        con.print("[red]Error: AI service not configured[/red]")
        raise typer.Exit(code=1)
    return service
