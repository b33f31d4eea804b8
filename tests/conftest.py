"""Pytest configuration and shared fixtures.

External API calls are replaced by FakeGenAIClient, which mimics the
``client.aio`` surface of google-genai and returns real
``google.genai.types`` response objects.
"""
import os
from types import SimpleNamespace

import pytest
from google.genai import errors, types

from thinkmate.ai import GeminiService
from thinkmate.errors import StorageError
from thinkmate.history import KeyValueChatHistory
from thinkmate.storage import InMemoryStore


def text_response(text: str, sources: list[tuple[str, str]] | None = None) -> types.GenerateContentResponse:
    """Build a text reply, optionally with web grounding sources (title, uri)."""
    metadata = None
    if sources:
        metadata = types.GroundingMetadata(
            grounding_chunks=[
                types.GroundingChunk(web=types.GroundingChunkWeb(title=title, uri=uri))
                for title, uri in sources
            ]
        )
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)]),
                grounding_metadata=metadata,
            )
        ]
    )


def inline_response(data: bytes, mime_type: str = "audio/pcm") -> types.GenerateContentResponse:
    """Build a reply carrying one inline binary part."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))],
                )
            )
        ]
    )


def quota_error() -> errors.ClientError:
    """The SDK error raised for HTTP 429 RESOURCE_EXHAUSTED."""
    return errors.ClientError(
        429,
        {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}},
    )


def empty_response() -> types.GenerateContentResponse:
    return types.GenerateContentResponse(candidates=[])


def video_operation(done: bool, uri: str | None = None) -> types.GenerateVideosOperation:
    response = None
    if uri is not None:
        response = types.GenerateVideosResponse(
            generated_videos=[types.GeneratedVideo(video=types.Video(uri=uri))]
        )
    return types.GenerateVideosOperation(name="operations/video-1", done=done, response=response)


class ReadOnlyStore(InMemoryStore):
    """In-memory store whose writes fail like an unwritable data directory."""

    def set(self, key: str, value: str) -> None:
        raise StorageError(f"Could not write {key}: read-only")

    def remove(self, key: str) -> None:
        raise StorageError(f"Could not remove {key}: read-only")


class FakeModels:
    """Stands in for ``client.aio.models``."""

    def __init__(self):
        self.calls: list[dict] = []
        self.responses: list = []
        self.error: Exception | None = None
        self.video_calls: list[dict] = []
        self.video_operation = video_operation(done=False)
        self.video_error: Exception | None = None

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return text_response("OK")

    async def generate_videos(self, *, model, prompt, config=None):
        self.video_calls.append({"model": model, "prompt": prompt, "config": config})
        if self.video_error is not None:
            raise self.video_error
        return self.video_operation

    def prompt_text(self, index: int = -1) -> str:
        """Concatenated text parts of a recorded request."""
        contents = self.calls[index]["contents"]
        return "".join(part.text for part in contents.parts if part.text)


class FakeOperations:
    """Stands in for ``client.aio.operations``; yields queued operations."""

    def __init__(self):
        self.polls = 0
        self.queue: list = []

    async def get(self, operation):
        self.polls += 1
        if self.queue:
            return self.queue.pop(0)
        return operation


class FakeGenAIClient:
    def __init__(self):
        self.aio = SimpleNamespace(models=FakeModels(), operations=FakeOperations())

    @property
    def models(self) -> FakeModels:
        return self.aio.models

    @property
    def operations(self) -> FakeOperations:
        return self.aio.operations


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {"gemini": os.getenv("GEMINI_API_KEY")}


@pytest.fixture
def fake_client():
    return FakeGenAIClient()


@pytest.fixture
def gemini(fake_client):
    """GeminiService wired to the fake client, polling without delay."""
    return GeminiService(api_key="test-key", client=fake_client, poll_interval=0)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def history(store):
    return KeyValueChatHistory(store)


@pytest.fixture
def sample_png(tmp_path):
    """Write a small file with a PNG signature."""
    path = tmp_path / "diagram.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)
    return path
