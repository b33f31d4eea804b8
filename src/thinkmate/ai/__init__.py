from .audio import pcm_to_wav
from .base import AIService
from .context import build_context_prompt
from .factory import create_ai_service
from .gemini import GeminiService
from .models import (
    AspectRatio,
    Difficulty,
    ImageSize,
    Intensity,
    QuizQuestion,
    SummaryStyle,
    VideoResult,
)

__all__ = [
    "AIService",
    "AspectRatio",
    "Difficulty",
    "GeminiService",
    "ImageSize",
    "Intensity",
    "QuizQuestion",
    "SummaryStyle",
    "VideoResult",
    "build_context_prompt",
    "create_ai_service",
    "pcm_to_wav",
]
