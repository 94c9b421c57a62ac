from __future__ import annotations

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from app.ai.client import GeminiTextModelClient
from app.ai.generator import QuestionGenerator
from app.ai.types import GeneratedQuestion
from app.core.config import get_settings
from app.core.errors import ValidationError
from app.db.repo.categories_repo import CategoriesRepo
from app.db.session import SessionLocal
from app.game.sessions.errors import CategoryNotFoundError

TOPIC_MAX_LENGTH = 200


@lru_cache(maxsize=1)
def get_question_generator() -> QuestionGenerator:
    settings = get_settings()
    return QuestionGenerator(
        client=GeminiTextModelClient(api_key=settings.gemini_api_key, model=settings.gemini_model),
        max_attempts=settings.ai_max_attempts,
        language=settings.ai_question_language,
    )


def clean_topic(topic: str) -> str:
    cleaned = " ".join((topic or "").split())
    if not cleaned:
        raise ValidationError("Topic is required.")
    if len(cleaned) > TOPIC_MAX_LENGTH:
        raise ValidationError(f"Topic must be at most {TOPIC_MAX_LENGTH} characters.")
    return cleaned


async def resolve_category_topic(session: AsyncSession, *, category_id: int) -> str:
    category = await CategoriesRepo.get_by_id(session, category_id)
    if category is None:
        raise CategoryNotFoundError
    return category.name


async def generate_for_topic(
    generator: QuestionGenerator,
    *,
    topic: str,
) -> tuple[str, list[GeneratedQuestion]]:
    cleaned = clean_topic(topic)
    return cleaned, await generator.generate(cleaned)


async def generate_for_category(
    generator: QuestionGenerator,
    *,
    category_id: int,
) -> tuple[str, list[GeneratedQuestion]]:
    # The model call can take seconds; do not hold the transaction open for it.
    async with SessionLocal.begin() as session:
        topic = await resolve_category_topic(session, category_id=category_id)
    return topic, await generator.generate(topic)
