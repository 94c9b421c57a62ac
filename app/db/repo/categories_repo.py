from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.categories import Category
from app.db.models.questions import Question


@dataclass(frozen=True, slots=True)
class CategoryWithCount:
    id: int
    name: str
    question_count: int


class CategoriesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, category_id: int) -> Category | None:
        return await session.get(Category, category_id)

    @staticmethod
    async def get_by_name(session: AsyncSession, name: str) -> Category | None:
        stmt = select(Category).where(func.lower(Category.name) == name.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_with_question_counts(session: AsyncSession) -> list[CategoryWithCount]:
        stmt = (
            select(Category.id, Category.name, func.count(Question.id))
            .outerjoin(Question, Question.category_id == Category.id)
            .group_by(Category.id, Category.name)
            .order_by(Category.name.asc())
        )
        result = await session.execute(stmt)
        return [
            CategoryWithCount(id=category_id, name=name, question_count=int(count or 0))
            for category_id, name, count in result.all()
        ]

    @staticmethod
    async def count_questions(session: AsyncSession, category_id: int) -> int:
        stmt = select(func.count(Question.id)).where(Question.category_id == category_id)
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def create(session: AsyncSession, *, name: str) -> Category:
        category = Category(name=name)
        session.add(category)
        await session.flush()
        return category

    @staticmethod
    async def delete_by_id(session: AsyncSession, category_id: int) -> int:
        result = await session.execute(delete(Category).where(Category.id == category_id))
        return result.rowcount or 0

    @staticmethod
    async def count_all(session: AsyncSession) -> int:
        result = await session.execute(select(func.count(Category.id)))
        return int(result.scalar_one() or 0)
