"""Quiz workflow.

State machine over a generated question set:
idle -> loading -> active -> finished, back to idle on failure or restart.
"""

from enum import Enum

from ..ai.base import AIService
from ..ai.models import Difficulty, QuizQuestion

QUIZ_FAILED_MESSAGE = "Failed to generate quiz. Please try again."
QUESTION_COUNTS = (5, 10, 15)


class QuizStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ACTIVE = "active"
    FINISHED = "finished"


class QuizSession:
    """Runs one quiz: generation, answering, scoring."""

    def __init__(self, ai: AIService):
        self._ai = ai
        self._reset()

    def _reset(self) -> None:
        self.status = QuizStatus.IDLE
        self.questions: list[QuizQuestion] = []
        self.current_index = 0
        self.selected_option: str | None = None
        self.is_answer_checked = False
        self.score = 0
        self.error: str | None = None

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.status != QuizStatus.ACTIVE or not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def percentage(self) -> int:
        if not self.questions:
            return 0
        return round(self.score / len(self.questions) * 100)

    async def start(
        self,
        topic: str,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        count: int = 5,
    ) -> bool:
        """Generate questions and begin the quiz.

        Returns:
            True when the quiz is active; False for a blank topic or when
            generation produced no questions
        """
        if not topic.strip() or self.status == QuizStatus.LOADING:
            return False
        self.status = QuizStatus.LOADING
        self.error = None
        questions = await self._ai.generate_quiz(topic.strip(), Difficulty(difficulty).value, count)
        if not questions:
            self.status = QuizStatus.IDLE
            self.error = QUIZ_FAILED_MESSAGE
            return False
        self.questions = questions
        self.current_index = 0
        self.score = 0
        self.selected_option = None
        self.is_answer_checked = False
        self.status = QuizStatus.ACTIVE
        return True

    def select(self, option: str) -> None:
        """Choose an option for the current question (before checking)."""
        if self.current_question is None or self.is_answer_checked:
            return
        self.selected_option = option

    def check(self) -> bool | None:
        """Check the selected option.

        Returns:
            Whether the selection was correct, or None if nothing to check
        """
        question = self.current_question
        if question is None or self.selected_option is None or self.is_answer_checked:
            return None
        self.is_answer_checked = True
        correct = question.is_correct(self.selected_option)
        if correct:
            self.score += 1
        return correct

    def next(self) -> None:
        """Advance to the next question, finishing after the last one."""
        if self.status != QuizStatus.ACTIVE:
            return
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            self.selected_option = None
            self.is_answer_checked = False
        else:
            self.status = QuizStatus.FINISHED

    def restart(self) -> None:
        """Drop the current quiz and return to idle."""
        self._reset()
