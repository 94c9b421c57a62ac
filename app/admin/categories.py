from __future__ import annotations

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, ValidationError
from app.db.repo.categories_repo import CategoriesRepo, CategoryWithCount
from app.game.sessions.errors import CategoryNotFoundError

CATEGORY_NAME_MAX_LENGTH = 100

logger = structlog.get_logger(__name__)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Category name is required.")
    if len(cleaned) > CATEGORY_NAME_MAX_LENGTH:
        raise ValidationError("Category name is too long.")
    return cleaned


async def _assert_name_free(
    session: AsyncSession,
    *,
    name: str,
    category_id: int | None = None,
) -> None:
    existing = await CategoriesRepo.get_by_name(session, name)
    if existing is not None and existing.id != category_id:
        raise ConflictError(f"Category '{name}' already exists.")


class AdminCategoriesService:
    @staticmethod
    async def list_categories(session: AsyncSession) -> list[CategoryWithCount]:
        return await CategoriesRepo.list_with_question_counts(session)

    @staticmethod
    async def create_category(session: AsyncSession, *, name: str) -> CategoryWithCount:
        cleaned = _clean_name(name)
        await _assert_name_free(session, name=cleaned)
        try:
            category = await CategoriesRepo.create(session, name=cleaned)
        except IntegrityError as exc:
            raise ConflictError(f"Category '{cleaned}' already exists.") from exc
        logger.info("admin_category_created", category_id=category.id, name=category.name)
        return CategoryWithCount(id=category.id, name=category.name, question_count=0)

    @staticmethod
    async def update_category(
        session: AsyncSession,
        *,
        category_id: int,
        name: str,
    ) -> CategoryWithCount:
        cleaned = _clean_name(name)
        category = await CategoriesRepo.get_by_id(session, category_id)
        if category is None:
            raise CategoryNotFoundError
        await _assert_name_free(session, name=cleaned, category_id=category_id)

        category.name = cleaned
        try:
            await session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Category '{cleaned}' already exists.") from exc

        question_count = await CategoriesRepo.count_questions(session, category_id)
        logger.info("admin_category_updated", category_id=category_id, name=cleaned)
        return CategoryWithCount(id=category.id, name=category.name, question_count=question_count)

    @staticmethod
    async def delete_category(session: AsyncSession, *, category_id: int) -> None:
        category = await CategoriesRepo.get_by_id(session, category_id)
        if category is None:
            raise CategoryNotFoundError
        await CategoriesRepo.delete_by_id(session, category_id)
        logger.info("admin_category_deleted", category_id=category_id, name=category.name)
