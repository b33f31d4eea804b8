"""Single-shot tool workflows.

Each workflow is an independent request/response form: it validates its
input, calls one AI operation, and keeps the last result and a
user-facing error message. Blank required input is a no-op.
"""

import logging

from ..ai.base import AIService
from ..ai.models import AspectRatio, ImageSize, Intensity, SummaryStyle, VideoResult
from ..history.models import Attachment

logger = logging.getLogger(__name__)

IMAGE_EDIT_FAILED = "Failed to edit image."
IMAGE_GENERATION_FAILED = (
    "Failed to generate image. Please try again (You may need to select a Paid API Key)."
)
VIDEO_GENERATION_FAILED = "Failed to generate video. Please try again later."
DEFAULT_ANALYSIS_PROMPT = "Analyze this video and list key educational takeaways."

EDIT_MODE_TEMPLATES = {
    "free": "{prompt}",
    "object-removal": "Remove the {prompt} from the image and fill in the background seamlessly.",
    "filter": "Apply a {prompt} filter to this image.",
    "style": "Transfer the style of {prompt} to this image.",
}


class Workflow:
    """Shared loading/error state for tool workflows."""

    def __init__(self, ai: AIService):
        self._ai = ai
        self.is_loading = False
        self.error: str | None = None

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None

    def _end(self) -> None:
        self.is_loading = False


class Summarizer(Workflow):
    def __init__(self, ai: AIService):
        super().__init__(ai)
        self.summary: str | None = None

    async def run(self, text: str, style: SummaryStyle | str = SummaryStyle.BULLET) -> str | None:
        if not text.strip() or self.is_loading:
            return None
        self._begin()
        try:
            self.summary = await self._ai.generate_summary(text, SummaryStyle(style))
        finally:
            self._end()
        return self.summary


class StudyPlanner(Workflow):
    def __init__(self, ai: AIService):
        super().__init__(ai)
        self.plan: str | None = None

    async def run(
        self,
        topic: str,
        days: int = 3,
        intensity: Intensity | str = Intensity.MEDIUM,
    ) -> str | None:
        if not topic.strip() or self.is_loading:
            return None
        if days < 1:
            raise ValueError("days must be at least 1")
        self._begin()
        try:
            self.plan = await self._ai.generate_study_plan(topic.strip(), days, Intensity(intensity).value)
        finally:
            self._end()
        return self.plan


class VideoAnalyzer(Workflow):
    def __init__(self, ai: AIService):
        super().__init__(ai)
        self.analysis: str | None = None

    async def run(self, video: Attachment | None, prompt: str = DEFAULT_ANALYSIS_PROMPT) -> str | None:
        if video is None or self.is_loading:
            return None
        self._begin()
        try:
            self.analysis = await self._ai.analyze_video(video.raw_bytes(), video.mime_type, prompt)
        finally:
            self._end()
        return self.analysis


class ImageEditor(Workflow):
    """Edits an uploaded image with a free-form or templated instruction."""

    def __init__(self, ai: AIService):
        super().__init__(ai)
        self.result: bytes | None = None

    @staticmethod
    def build_prompt(prompt: str, mode: str = "free") -> str:
        try:
            template = EDIT_MODE_TEMPLATES[mode]
        except KeyError:
            raise ValueError(
                f"Unknown edit mode: {mode}. Supported modes: {', '.join(EDIT_MODE_TEMPLATES)}"
            ) from None
        return template.format(prompt=prompt.strip())

    async def run(self, image: Attachment | None, prompt: str, mode: str = "free") -> bytes | None:
        if image is None or not prompt.strip() or self.is_loading:
            return None
        final_prompt = self.build_prompt(prompt, mode)
        self._begin()
        self.result = None
        try:
            self.result = await self._ai.edit_image(image.raw_bytes(), final_prompt, image.mime_type)
        finally:
            self._end()
        if self.result is None:
            self.error = IMAGE_EDIT_FAILED
        return self.result


class ImageGenerator(Workflow):
    def __init__(self, ai: AIService):
        super().__init__(ai)
        self.result: bytes | None = None

    async def run(self, prompt: str, size: ImageSize | str = ImageSize.STANDARD) -> bytes | None:
        if not prompt.strip() or self.is_loading:
            return None
        self._begin()
        self.result = None
        try:
            self.result = await self._ai.generate_image(prompt, ImageSize(size))
        finally:
            self._end()
        if self.result is None:
            self.error = IMAGE_GENERATION_FAILED
        return self.result


class VideoGenerator(Workflow):
    """Generates a short video; waits on the provider's job."""

    def __init__(self, ai: AIService, max_wait: float | None = None):
        super().__init__(ai)
        self._max_wait = max_wait
        self.video_url: str | None = None

    async def run(
        self,
        prompt: str,
        aspect_ratio: AspectRatio | str = AspectRatio.LANDSCAPE,
    ) -> str | None:
        if not prompt.strip() or self.is_loading:
            return None
        self._begin()
        self.video_url = None
        try:
            result: VideoResult | None = await self._ai.generate_video(
                prompt, AspectRatio(aspect_ratio), max_wait=self._max_wait
            )
        finally:
            self._end()
        if result is None:
            self.error = VIDEO_GENERATION_FAILED
        elif result.ok:
            self.video_url = result.url
        else:
            self.error = result.error
        return self.video_url
