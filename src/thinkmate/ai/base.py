from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..errors import AIServiceError
from ..history.models import Attachment, Message
from .models import AspectRatio, ImageSize, QuizQuestion, SummaryStyle, VideoResult

# User-facing fallbacks
CHAT_FALLBACK = (
    "Something went wrong while connecting to ThinkMate. "
    "Please check your connection or try a shorter message."
)
EMPTY_CHAT_REPLY = "I couldn't generate a response at the moment. Please try again."
EMPTY_PLAN = "Could not generate plan."
PLAN_ERROR = "Error generating plan."
EMPTY_SUMMARY = "Could not generate summary."
SUMMARY_ERROR = "Error generating summary."
EMPTY_VIDEO_ANALYSIS = "Unable to analyze video."
VIDEO_ANALYSIS_ERROR = (
    "Error analyzing video. Please make sure the video is less than 20MB and try again."
)
VIDEO_QUOTA_MESSAGE = (
    "Video generation limit reached (Quota Exceeded). "
    "Please try again later or use the text features."
)
VIDEO_TIMEOUT_MESSAGE = "Video generation is taking too long. Please try again later."
DEFAULT_VIDEO_PROMPT = "Analyze this video and describe what is happening in detail."


class AIService(ABC):
    """Abstract base class for the external generative-AI service.

    This module hides the design decision of which provider backs the
    student tools. Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request payload construction (inline file parts, context window)
    - Response parsing (text, inline binary, long-running operations)
    - Degrading failures to user-facing fallbacks

    Only chat() raises; every other operation returns a fallback string,
    an empty value or None on failure.

    Supports async context manager protocol for proper resource cleanup:
        async with service:
            text = await service.generate_summary(notes, SummaryStyle.BULLET)
    """

    @abstractmethod
    async def chat(
        self,
        message: str,
        history: Sequence[Message] = (),
        attachment: Attachment | None = None,
    ) -> str:
        """Answer a student message.

        Args:
            message: Current message text
            history: Prior messages, oldest first (windowed by the service)
            attachment: Optional file sent inline with the message

        Returns:
            Reply text (Markdown)

        Raises:
            AIServiceError: On any transport or service failure
        """

    async def generate_response(
        self,
        message: str,
        history: Sequence[Message] = (),
        attachment: Attachment | None = None,
    ) -> str:
        """Like chat(), but degrades failures to a fallback string."""
        try:
            return await self.chat(message, history, attachment)
        except AIServiceError:
            return CHAT_FALLBACK

    @abstractmethod
    async def transcribe_audio(self, audio: bytes, mime_type: str = "audio/wav") -> str:
        """Transcribe speech. Returns "" on failure."""

    @abstractmethod
    async def generate_speech(self, text: str) -> bytes | None:
        """Synthesize speech as raw PCM. Returns None on failure."""

    @abstractmethod
    async def generate_quiz(
        self,
        topic: str,
        difficulty: str = "Medium",
        count: int = 5,
    ) -> list[QuizQuestion]:
        """Generate multiple-choice questions. Returns [] on failure."""

    @abstractmethod
    async def generate_study_plan(self, topic: str, days: int, intensity: str) -> str:
        """Generate a Markdown study plan table."""

    @abstractmethod
    async def generate_summary(self, text: str, style: SummaryStyle | str) -> str:
        """Summarize text in the given style."""

    @abstractmethod
    async def edit_image(
        self,
        image: bytes,
        prompt: str,
        mime_type: str = "image/jpeg",
    ) -> bytes | None:
        """Edit an image following a prompt. Returns image bytes or None."""

    @abstractmethod
    async def analyze_video(self, video: bytes, mime_type: str, prompt: str = "") -> str:
        """Describe a video."""

    @abstractmethod
    async def generate_image(
        self,
        prompt: str,
        size: ImageSize | str = ImageSize.STANDARD,
    ) -> bytes | None:
        """Generate an image from a prompt. Returns image bytes or None."""

    @abstractmethod
    async def generate_video(
        self,
        prompt: str,
        aspect_ratio: AspectRatio | str = AspectRatio.LANDSCAPE,
        max_wait: float | None = None,
    ) -> VideoResult | None:
        """Generate a video and wait for the job to finish.

        Returns:
            VideoResult with a URL, VideoResult with a user-facing error for
            quota exhaustion or timeout, or None for other failures
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "AIService":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
