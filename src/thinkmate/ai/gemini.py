"""Google Gemini implementation of the AI service.

Uses the official Google GenAI SDK for async requests.
Reference: https://github.com/googleapis/python-genai

Every operation is a single request except video generation, which submits
a long-running job and polls it until it reports completion.
"""

import asyncio
import base64
import json
import logging
import re
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types
from pydantic import TypeAdapter

from ..config import (
    CHAT_MODEL,
    CHAT_TEMPERATURE,
    IMAGE_MODEL,
    TTS_MODEL,
    TTS_VOICE,
    VIDEO_ANALYSIS_MODEL,
    VIDEO_GENERATION_MODEL,
    VIDEO_POLL_INTERVAL,
    VIDEO_RESOLUTION,
)
from ..errors import AIServiceError, QuotaExceededError
from ..history.models import Attachment, Message
from ..prompts import get_system_prompt, load_prompt, render_prompt
from .base import (
    DEFAULT_VIDEO_PROMPT,
    EMPTY_CHAT_REPLY,
    EMPTY_PLAN,
    EMPTY_SUMMARY,
    EMPTY_VIDEO_ANALYSIS,
    PLAN_ERROR,
    SUMMARY_ERROR,
    VIDEO_ANALYSIS_ERROR,
    VIDEO_QUOTA_MESSAGE,
    VIDEO_TIMEOUT_MESSAGE,
    AIService,
)
from .context import build_context_prompt
from .models import AspectRatio, ImageSize, QuizQuestion, SummaryStyle, VideoResult

logger = logging.getLogger(__name__)

_QUIZ_ADAPTER = TypeAdapter(list[QuizQuestion])
_CODE_FENCE = re.compile(r"```json|```")

IMAGE_EDIT_SUFFIX = ". Maintain the original aspect ratio and high quality."


def is_quota_error(error: BaseException) -> bool:
    """Detect the provider's quota-exhaustion error (HTTP 429)."""
    if getattr(error, "code", None) == 429:
        return True
    if getattr(error, "status", None) == "RESOURCE_EXHAUSTED":
        return True
    return "429" in str(error)


class GeminiService(AIService):
    """Google Gemini AI service.

    Hidden design decisions:
    - Google GenAI client initialization
    - Per-operation model selection
    - Inline-data parts for attachments, audio, images and video
    - Google Maps grounding for chat, with sources appended to the reply
    - Fixed-interval polling of video generation operations
    """

    def __init__(
        self,
        api_key: str,
        model: str = CHAT_MODEL,
        grounding: bool = True,
        poll_interval: float = VIDEO_POLL_INTERVAL,
        client: Any | None = None,
        **client_kwargs: Any
    ):
        """Initialize the Gemini service.

        Args:
            api_key: Google AI API key (also appended to generated video URLs)
            model: Chat/text model (default gemini-2.5-flash)
            grounding: Attach the Google Maps grounding tool to chat requests
            poll_interval: Seconds between video operation polls
            client: Pre-built client (tests inject a fake here)
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._api_key = api_key
        self._model = model
        self._grounding = grounding
        self._poll_interval = poll_interval
        self._client = client if client is not None else genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the chat model name."""
        return self._model

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    def _extract_text(self, response) -> str:
        """Extract text content from a response, handling empty responses."""
        if response.candidates and len(response.candidates) > 0:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    def _extract_inline_data(self, response) -> bytes | None:
        """Return the first inline binary part of a response, if any."""
        if not response.candidates:
            return None
        content = response.candidates[0].content
        if content is None or not content.parts:
            return None
        for part in content.parts:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                data = inline.data
                if isinstance(data, str):
                    return base64.b64decode(data)
                return data
        return None

    def _grounding_sources(self, response) -> list[str]:
        """Collect deduplicated Markdown links from grounding metadata."""
        if not response.candidates:
            return []
        metadata = getattr(response.candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        sources = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            maps = getattr(chunk, "maps", None)
            if web is not None and web.uri and web.title:
                sources.append(f"- [{web.title}]({web.uri})")
            elif maps is not None and getattr(maps, "uri", None) and getattr(maps, "title", None):
                sources.append(f"- [📍 {maps.title}]({maps.uri})")
        return list(dict.fromkeys(sources))

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _inline_part(data: bytes, mime_type: str) -> types.Part:
        return types.Part.from_bytes(data=data, mime_type=mime_type)

    def _chat_config(self) -> types.GenerateContentConfig:
        tools = [types.Tool(google_maps=types.GoogleMaps())] if self._grounding else None
        return types.GenerateContentConfig(
            system_instruction=get_system_prompt(),
            temperature=CHAT_TEMPERATURE,
            tools=tools,
        )

    async def _generate(
        self,
        model: str,
        parts: list[types.Part],
        config: types.GenerateContentConfig | None = None,
    ):
        return await self._client.aio.models.generate_content(
            model=model,
            contents=types.Content(role="user", parts=parts),
            config=config,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def chat(
        self,
        message: str,
        history: Sequence[Message] = (),
        attachment: Attachment | None = None,
    ) -> str:
        """Answer a student message with the tutor system instruction.

        Raises:
            QuotaExceededError: On a 429 from the provider
            AIServiceError: On any other failure
        """
        try:
            parts = []
            if attachment is not None:
                parts.append(self._inline_part(attachment.raw_bytes(), attachment.mime_type))
            parts.append(types.Part(text=build_context_prompt(history) + message))

            response = await self._generate(self._model, parts, self._chat_config())
            text = self._extract_text(response) or EMPTY_CHAT_REPLY
            sources = self._grounding_sources(response)
        except Exception as e:
            logger.error("Gemini chat request failed: %s", e)
            if is_quota_error(e):
                raise QuotaExceededError(str(e), operation="chat") from e
            raise AIServiceError(str(e), operation="chat") from e

        if sources:
            text += "\n\n**Sources & Locations:**\n" + "\n".join(sources)
        return text

    async def transcribe_audio(self, audio: bytes, mime_type: str = "audio/wav") -> str:
        parts = [
            self._inline_part(audio, mime_type),
            types.Part(text=load_prompt("transcribe")),
        ]
        try:
            response = await self._generate(self._model, parts)
        except Exception as e:
            logger.error("Transcription error: %s", e)
            return ""
        return self._extract_text(response)

    async def generate_speech(self, text: str) -> bytes | None:
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=TTS_VOICE)
                )
            ),
        )
        try:
            response = await self._generate(TTS_MODEL, [types.Part(text=text.replace("*", ""))], config)
        except Exception as e:
            logger.error("TTS error: %s", e)
            return None
        return self._extract_inline_data(response)

    async def generate_quiz(
        self,
        topic: str,
        difficulty: str = "Medium",
        count: int = 5,
    ) -> list[QuizQuestion]:
        prompt = render_prompt("quiz", topic=topic, difficulty=str(difficulty), count=count)
        config = types.GenerateContentConfig(response_mime_type="application/json")
        try:
            response = await self._generate(self._model, [types.Part(text=prompt)], config)
            text = self._extract_text(response) or "[]"
            cleaned = _CODE_FENCE.sub("", text).strip()
            return _QUIZ_ADAPTER.validate_python(json.loads(cleaned))
        except Exception as e:
            logger.error("Quiz generation error: %s", e)
            return []

    async def generate_study_plan(self, topic: str, days: int, intensity: str) -> str:
        prompt = render_prompt("study_plan", topic=topic, days=days, intensity=str(intensity))
        try:
            response = await self._generate(self._model, [types.Part(text=prompt)])
        except Exception as e:
            logger.error("Study plan error: %s", e)
            return PLAN_ERROR
        return self._extract_text(response) or EMPTY_PLAN

    async def generate_summary(self, text: str, style: SummaryStyle | str) -> str:
        instruction = load_prompt(f"summary_{SummaryStyle(style).value}")
        try:
            response = await self._generate(self._model, [types.Part(text=f"{instruction}\n\n{text}")])
        except Exception as e:
            logger.error("Summary error: %s", e)
            return SUMMARY_ERROR
        return self._extract_text(response) or EMPTY_SUMMARY

    async def edit_image(
        self,
        image: bytes,
        prompt: str,
        mime_type: str = "image/jpeg",
    ) -> bytes | None:
        parts = [
            self._inline_part(image, mime_type),
            types.Part(text=prompt + IMAGE_EDIT_SUFFIX),
        ]
        try:
            response = await self._generate(IMAGE_MODEL, parts)
        except Exception as e:
            logger.error("Image edit error: %s", e)
            return None
        return self._extract_inline_data(response)

    async def analyze_video(self, video: bytes, mime_type: str, prompt: str = "") -> str:
        parts = [
            self._inline_part(video, mime_type),
            types.Part(text=prompt or DEFAULT_VIDEO_PROMPT),
        ]
        try:
            response = await self._generate(VIDEO_ANALYSIS_MODEL, parts)
        except Exception as e:
            logger.error("Video analysis error: %s", e)
            return VIDEO_ANALYSIS_ERROR
        return self._extract_text(response) or EMPTY_VIDEO_ANALYSIS

    async def generate_image(
        self,
        prompt: str,
        size: ImageSize | str = ImageSize.STANDARD,
    ) -> bytes | None:
        # The image model picks its own resolution; size is advisory only.
        logger.debug("Generating image at requested size %s", ImageSize(size).value)
        try:
            response = await self._generate(IMAGE_MODEL, [types.Part(text=prompt)])
        except Exception as e:
            logger.error("Image generation error: %s", e)
            return None
        return self._extract_inline_data(response)

    def _video_url(self, operation) -> str | None:
        response = getattr(operation, "response", None)
        videos = getattr(response, "generated_videos", None) or []
        if not videos or videos[0].video is None or not videos[0].video.uri:
            return None
        uri = videos[0].video.uri
        separator = "&" if "?" in uri else "?"
        return f"{uri}{separator}key={self._api_key}"

    async def generate_video(
        self,
        prompt: str,
        aspect_ratio: AspectRatio | str = AspectRatio.LANDSCAPE,
        max_wait: float | None = None,
    ) -> VideoResult | None:
        """Submit a video job and poll it until done.

        Args:
            prompt: Scene description
            aspect_ratio: "16:9" or "9:16"
            max_wait: Seconds to wait before giving up; None waits indefinitely

        Returns:
            VideoResult or None (see AIService.generate_video)
        """
        config = types.GenerateVideosConfig(
            number_of_videos=1,
            resolution=VIDEO_RESOLUTION,
            aspect_ratio=AspectRatio(aspect_ratio).value,
        )
        loop = asyncio.get_running_loop()
        try:
            operation = await self._client.aio.models.generate_videos(
                model=VIDEO_GENERATION_MODEL,
                prompt=prompt,
                config=config,
            )
            started = loop.time()
            while not operation.done:
                if max_wait is not None and loop.time() - started >= max_wait:
                    logger.warning("Video generation exceeded %.0fs, giving up", max_wait)
                    return VideoResult(error=VIDEO_TIMEOUT_MESSAGE)
                await asyncio.sleep(self._poll_interval)
                operation = await self._client.aio.operations.get(operation)
                logger.debug("Polled video operation %s (done=%s)", operation.name, operation.done)
        except Exception as e:
            logger.error("Video generation error: %s", e)
            if is_quota_error(e):
                return VideoResult(error=VIDEO_QUOTA_MESSAGE)
            return None

        url = self._video_url(operation)
        if url is None:
            return None
        return VideoResult(url=url)

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
