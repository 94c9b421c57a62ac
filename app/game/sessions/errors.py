from __future__ import annotations

from app.core.errors import (
    AppError,
    ConflictError,
    InsufficientDataError,
    NotFoundError,
    ValidationError,
)


class GameSessionError(AppError):
    pass


class SessionStateError(GameSessionError, ConflictError):
    code = "E_SESSION_STATE"
    default_message = "Quiz session is not accepting this action."


class InvalidAnswerOptionError(GameSessionError, ValidationError):
    code = "E_INVALID_ANSWER_OPTION"
    default_message = "Answer must be one of A, B, C or D."


class InsufficientQuestionsError(GameSessionError, InsufficientDataError):
    def __init__(self, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(f"Only {remaining} unanswered questions left in this category.")


class CategoryNotFoundError(GameSessionError, NotFoundError):
    default_message = "Category not found."


class QuestionNotFoundError(GameSessionError, NotFoundError):
    default_message = "Question not found."


class QuizNotFoundError(GameSessionError, NotFoundError):
    default_message = "Quiz result not found."


class InvalidSubmissionError(GameSessionError, ValidationError):
    code = "E_INVALID_SUBMISSION"
    default_message = "Quiz submission is inconsistent."
