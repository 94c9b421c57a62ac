from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from app.ai.errors import GeneratedQuestionsInvalidError
from app.ai.types import GeneratedQuestion


def _describe_failure(exc: ValidationError, *, position: int) -> str:
    locations = [error["loc"] for error in exc.errors()]
    fields = {loc[0] for loc in locations if loc}

    if "question" in fields:
        return f"question {position} has no question text"
    missing_options = sorted({str(loc[1]) for loc in locations if len(loc) == 2 and loc[0] == "options"})
    if missing_options:
        return f"question {position} is missing options {', '.join(missing_options)}"
    if "options" in fields:
        return f"question {position} has no options"
    if "correct_option" in fields:
        return f"question {position} has an invalid correct option"
    return f"question {position} is not an object"


def validate_generated_questions(payload: Any) -> list[GeneratedQuestion]:
    if not isinstance(payload, dict):
        raise GeneratedQuestionsInvalidError("payload is not an object")
    items = payload.get("questions")
    if not isinstance(items, list) or not items:
        raise GeneratedQuestionsInvalidError("no questions in payload")

    questions: list[GeneratedQuestion] = []
    for position, item in enumerate(items, start=1):
        try:
            questions.append(GeneratedQuestion.model_validate(item))
        except ValidationError as exc:
            raise GeneratedQuestionsInvalidError(_describe_failure(exc, position=position)) from exc
    return questions
