from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from app.game.questions.types import QuizQuestion


class SessionState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"


@dataclass(slots=True)
class RecordedAnswer:
    question_id: int
    user_answer: str
    is_correct: bool


@dataclass(slots=True)
class QuizSubmission:
    category_id: int
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    score: int
    answers: list[RecordedAnswer] = field(default_factory=list)


@dataclass(slots=True)
class AnswerOutcome:
    question_id: int
    user_answer: str
    is_correct: bool
    correct_option: str
    correct_count: int
    incorrect_count: int
    next_index: int | None
    finished: bool
    result_id: int | None = None


@dataclass(slots=True)
class QuizResultQuestionView:
    question_id: int
    question: str
    options: dict[str, str]
    user_answer: str
    correct_answer: str
    is_correct: bool


@dataclass(slots=True)
class QuizResultView:
    quiz_id: int
    category_id: int
    category_name: str
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    score: int
    played_at: datetime
    questions: list[QuizResultQuestionView]


QuestionSource = Callable[[int], Awaitable[Sequence[QuizQuestion]]]
ResultSubmitter = Callable[[QuizSubmission], Awaitable[int]]
