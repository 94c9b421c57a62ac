from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from app.game.questions.types import OPTION_LETTERS, QuizQuestion
from app.game.scoring import score
from app.game.sessions.errors import InvalidAnswerOptionError, SessionStateError
from app.game.sessions.types import (
    AnswerOutcome,
    QuestionSource,
    QuizSubmission,
    RecordedAnswer,
    ResultSubmitter,
    SessionState,
)

logger = structlog.get_logger(__name__)


def normalize_answer_letter(letter: str) -> str:
    normalized = (letter or "").strip().upper()
    if normalized not in OPTION_LETTERS:
        raise InvalidAnswerOptionError
    return normalized


class QuizSessionTracker:
    """Single-player quiz session held by whoever drives the quiz flow.

    The tracker owns the shuffled question list, the current index and the
    running tally. Questions come from ``question_source`` and the finished
    session goes to ``submitter``; both are awaited so the same tracker works
    against the database in-process or against the HTTP API from a client.

    Sessions are not synchronized across tabs or devices: two trackers for the
    same user and category are independent and each submits its own result.
    """

    def __init__(
        self,
        *,
        question_source: QuestionSource,
        submitter: ResultSubmitter,
        rng: random.Random | None = None,
    ) -> None:
        self._question_source = question_source
        self._submitter = submitter
        self._rng = rng or random.Random()
        self._state = SessionState.NOT_STARTED
        self._category_id: int | None = None
        self._questions: list[QuizQuestion] = []
        self._answers: list[RecordedAnswer] = []
        self._index = 0
        self._correct = 0
        self._incorrect = 0
        self._result_id: int | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def category_id(self) -> int | None:
        return self._category_id

    @property
    def questions(self) -> Sequence[QuizQuestion]:
        return tuple(self._questions)

    @property
    def answers(self) -> Sequence[RecordedAnswer]:
        return tuple(self._answers)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def correct_count(self) -> int:
        return self._correct

    @property
    def incorrect_count(self) -> int:
        return self._incorrect

    @property
    def result_id(self) -> int | None:
        return self._result_id

    @property
    def current_question(self) -> QuizQuestion | None:
        if self._state is not SessionState.IN_PROGRESS:
            return None
        return self._questions[self._index]

    async def start(self, category_id: int) -> QuizQuestion:
        if self._state is not SessionState.NOT_STARTED:
            raise SessionStateError("Quiz session has already been started.")

        questions = list(await self._question_source(category_id))
        if not questions:
            raise SessionStateError("Quiz session has no questions.")
        self._rng.shuffle(questions)

        self._category_id = category_id
        self._questions = questions
        self._index = 0
        self._state = SessionState.IN_PROGRESS
        logger.debug(
            "quiz_session_started",
            category_id=category_id,
            question_count=len(questions),
        )
        return questions[0]

    async def submit_answer(self, letter: str) -> AnswerOutcome:
        if self._state is not SessionState.IN_PROGRESS:
            raise SessionStateError(f"Cannot answer a quiz session in state {self._state.value}.")
        if len(self._answers) > self._index:
            # Last answer is recorded but finish() failed; only a retry of finish() is allowed.
            raise SessionStateError("Quiz answers are complete; retry submitting the result.")

        user_answer = normalize_answer_letter(letter)
        question = self._questions[self._index]
        is_correct = question.correct_option.upper() == user_answer

        self._answers.append(
            RecordedAnswer(
                question_id=question.question_id,
                user_answer=user_answer,
                is_correct=is_correct,
            )
        )
        if is_correct:
            self._correct += 1
        else:
            self._incorrect += 1

        is_last = self._index == len(self._questions) - 1
        result_id: int | None = None
        if is_last:
            result_id = await self.finish()
        else:
            self._index += 1

        return AnswerOutcome(
            question_id=question.question_id,
            user_answer=user_answer,
            is_correct=is_correct,
            correct_option=question.correct_option.upper(),
            correct_count=self._correct,
            incorrect_count=self._incorrect,
            next_index=None if is_last else self._index,
            finished=is_last,
            result_id=result_id,
        )

    def build_submission(self) -> QuizSubmission:
        if self._category_id is None:
            raise SessionStateError("Quiz session has not been started.")
        total = len(self._questions)
        return QuizSubmission(
            category_id=self._category_id,
            total_questions=total,
            correct_answers=self._correct,
            incorrect_answers=self._incorrect,
            score=score(self._correct, total),
            answers=list(self._answers),
        )

    async def finish(self) -> int:
        if self._state is not SessionState.IN_PROGRESS:
            raise SessionStateError(f"Cannot finish a quiz session in state {self._state.value}.")
        if len(self._answers) != len(self._questions):
            raise SessionStateError("Quiz session still has unanswered questions.")

        submission = self.build_submission()
        result_id = await self._submitter(submission)

        self._result_id = result_id
        self._state = SessionState.SUBMITTED
        logger.debug(
            "quiz_session_submitted",
            category_id=submission.category_id,
            result_id=result_id,
            score=submission.score,
        )
        return result_id
