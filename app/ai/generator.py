from __future__ import annotations

import structlog

from app.ai.client import TextModelClient
from app.ai.lenient_json import coerce_lenient_json
from app.ai.prompt import build_prompt
from app.ai.types import GeneratedQuestion
from app.ai.validation import validate_generated_questions
from app.core.errors import GenerationError

DEFAULT_MAX_ATTEMPTS = 3

logger = structlog.get_logger(__name__)


class QuestionGenerator:
    """Generates a question set for a topic from a text model.

    Each attempt is the full round trip: model call, lenient JSON coercion and
    schema validation. Any failure in any step is retried the same way until
    ``max_attempts`` is exhausted; a set is returned whole or not at all.
    """

    def __init__(
        self,
        *,
        client: TextModelClient,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        language: str = "English",
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._max_attempts = max_attempts
        self._language = language

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def _attempt(self, prompt: str) -> list[GeneratedQuestion]:
        raw_text = await self._client.generate(prompt)
        payload = coerce_lenient_json(raw_text)
        return validate_generated_questions(payload)

    async def generate(self, topic: str) -> list[GeneratedQuestion]:
        prompt = build_prompt(topic, language=self._language)
        logger.info("ai_generation_started", topic=topic, max_attempts=self._max_attempts)

        last_error: Exception | None = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                questions = await self._attempt(prompt)
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "ai_generation_attempt_failed",
                    topic=topic,
                    attempt=attempt,
                    max_attempts=self._max_attempts,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                continue

            logger.info(
                "ai_generation_succeeded",
                topic=topic,
                attempt=attempt,
                question_count=len(questions),
            )
            return questions

        logger.error(
            "ai_generation_exhausted",
            topic=topic,
            max_attempts=self._max_attempts,
            error_type=type(last_error).__name__ if last_error is not None else None,
        )
        raise GenerationError from last_error
