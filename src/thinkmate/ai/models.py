"""Request options and parsed results for the AI service."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SummaryStyle(str, Enum):
    BULLET = "bullet"
    PARAGRAPH = "paragraph"
    ELI5 = "eli5"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Intensity(str, Enum):
    LIGHT = "Light"  # 1-2 hrs
    MEDIUM = "Medium"  # 3-4 hrs
    HEAVY = "Heavy"  # 5+ hrs


class ImageSize(str, Enum):
    STANDARD = "1K"
    HIGH = "2K"
    ULTRA = "4K"


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class QuizQuestion(BaseModel):
    """One multiple-choice question as returned by the model."""

    model_config = ConfigDict(frozen=True)

    question: str
    options: list[str] = Field(description="Answer options (normally 4)")
    answer: str = Field(description="Correct option text")
    explanation: str = Field(default="", description="Why the answer is correct")

    def is_correct(self, option: str) -> bool:
        return option.strip() == self.answer.strip()


class VideoResult(BaseModel):
    """Outcome of a video generation job.

    Exactly one of url or error is set.
    """

    model_config = ConfigDict(frozen=True)

    url: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "VideoResult":
        if (self.url is None) == (self.error is None):
            raise ValueError("VideoResult needs exactly one of url or error")
        return self

    @property
    def ok(self) -> bool:
        return self.url is not None
