"""Prompt templates for the tutor and study tools.

The tutor persona and the transcription, summary, quiz and study-plan
instructions sent to Gemini live in .txt files beside this module. A
deployment can reword any of them by dropping a file with the same name
into ./prompts/ under the working directory.
"""

from functools import lru_cache
from pathlib import Path

_TEMPLATES_DIR = Path(__file__).parent
_OVERRIDE_DIR = Path("prompts")


@lru_cache(maxsize=32)
def load_prompt(name: str) -> str:
    """Return the text of the named template, trimmed.

    A ./prompts/<name>.txt override in the working directory wins over the
    bundled copy.

    Raises:
        FileNotFoundError: Neither an override nor a bundled template exists
    """
    candidates = [Path.cwd() / _OVERRIDE_DIR / f"{name}.txt", _TEMPLATES_DIR / f"{name}.txt"]
    for path in candidates:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()

    searched = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"No prompt template named '{name}'. Looked in:\n{searched}")


def render_prompt(name: str, **values: object) -> str:
    """Fill the {placeholders} of a template, e.g. render_prompt("study_plan", topic=..., days=3)."""
    return load_prompt(name).format(**values)


def get_system_prompt() -> str:
    return load_prompt("system")


def clear_cache() -> None:
    """Forget loaded templates so edited override files are picked up."""
    load_prompt.cache_clear()


__all__ = [
    "load_prompt",
    "render_prompt",
    "get_system_prompt",
    "clear_cache",
]
