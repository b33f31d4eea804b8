"""Independent student tool workflows over the AI service."""

from .creative import CREATIVE_TOOLS, CreativeTool, run_creative_tool
from .history import HistoryBrowser
from .quiz import QUIZ_FAILED_MESSAGE, QuizSession, QuizStatus
from .workflows import (
    IMAGE_EDIT_FAILED,
    IMAGE_GENERATION_FAILED,
    VIDEO_GENERATION_FAILED,
    ImageEditor,
    ImageGenerator,
    StudyPlanner,
    Summarizer,
    VideoAnalyzer,
    VideoGenerator,
)

__all__ = [
    "CREATIVE_TOOLS",
    "CreativeTool",
    "HistoryBrowser",
    "IMAGE_EDIT_FAILED",
    "IMAGE_GENERATION_FAILED",
    "ImageEditor",
    "ImageGenerator",
    "QUIZ_FAILED_MESSAGE",
    "QuizSession",
    "QuizStatus",
    "StudyPlanner",
    "Summarizer",
    "VIDEO_GENERATION_FAILED",
    "VideoAnalyzer",
    "VideoGenerator",
    "run_creative_tool",
]
